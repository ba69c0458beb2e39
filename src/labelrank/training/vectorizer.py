# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import math
from typing import Iterable, Mapping, Sequence

import numpy as np

from ..errors import ConfigurationError
from ..schemas import AttributeValue, Record, TrainingSample
from .dataset import to_number
from .vocabulary import Vocabulary, attribute_feature, normalize_token


def _grouped_features(label_map: Mapping[str, Sequence[object]]) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for label, features in label_map.items():
        bucket = grouped.setdefault(normalize_token(label), [])
        bucket.extend(normalize_token(feature) for feature in features)
    return grouped


def build_training_samples(label_map: Mapping[str, Sequence[object]], vocabulary: Vocabulary) -> list[TrainingSample]:
    """One-vs-all binary frame: one sample per label.

    Input slots of the label's features are 1, every other feature 0; the
    label's own output slot is 1 and all other labels 0.
    """
    samples: list[TrainingSample] = []
    for label, features in _grouped_features(label_map).items():
        samples.append(
            TrainingSample(
                label=label,
                input=vectorize_features(features, vocabulary),
                output=_one_hot(label, vocabulary, 1.0),
            )
        )
    return samples


def _one_hot(label: str, vocabulary: Vocabulary, value: float) -> np.ndarray:
    output = np.zeros(vocabulary.n_labels, dtype=np.float64)
    output[vocabulary.label_index[label]] = value
    return output


def attribute_number(value: AttributeValue) -> float:
    """Input value of one attribute in its own slot; a string marks its category slot."""
    if isinstance(value, str):
        return 1.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    return 0.0 if math.isnan(value) else float(value)


def build_tabular_samples(records: Sequence[Record], vocabulary: Vocabulary, *, target_type: str = "string") -> list[TrainingSample]:
    """One sample per record with numeric inputs.

    With a numeric target the label's output slot carries the target value
    itself, otherwise 1.
    """
    samples: list[TrainingSample] = []
    for record in records:
        label = normalize_token(record.target)
        if target_type == "number":
            value = to_number(record.target)
            if math.isnan(value):
                raise ConfigurationError(f"Target value {record.target!r} is not numeric")
        else:
            value = 1.0
        samples.append(
            TrainingSample(
                label=label,
                input=vectorize_attributes(record.attributes, vocabulary),
                output=_one_hot(label, vocabulary, value),
            )
        )
    return samples


def stack_samples(samples: Sequence[TrainingSample]) -> tuple[np.ndarray, np.ndarray]:
    if not samples:
        raise ConfigurationError("No training samples to stack.")
    inputs = np.vstack([sample.input for sample in samples])
    outputs = np.vstack([sample.output for sample in samples])
    return inputs, outputs


def vectorize_features(features: Iterable[object], vocabulary: Vocabulary) -> np.ndarray:
    """Binary input vector; tokens unknown to the vocabulary are ignored."""
    vector = np.zeros(vocabulary.n_features, dtype=np.float64)
    for feature in features:
        idx = vocabulary.feature_index.get(normalize_token(feature))
        if idx is not None:
            vector[idx] = 1.0
    return vector


def vectorize_attributes(attributes: Mapping[str, AttributeValue], vocabulary: Vocabulary) -> np.ndarray:
    vector = np.zeros(vocabulary.n_features, dtype=np.float64)
    for name, value in attributes.items():
        idx = vocabulary.feature_index.get(attribute_feature(name, value))
        if idx is not None:
            vector[idx] = attribute_number(value)
    return vector
