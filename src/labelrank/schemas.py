# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

import numpy as np

if TYPE_CHECKING:
    from .training.vocabulary import Vocabulary

AttributeValue = Union[str, float, bool]


@dataclass(frozen=True, slots=True)
class Record:
    target: str | float
    attributes: dict[str, AttributeValue] = field(default_factory=dict)
    column: str = ""


@dataclass(slots=True)
class TrainingSample:
    label: str
    input: np.ndarray
    output: np.ndarray

    def as_mapping(self, vocabulary: "Vocabulary") -> dict[str, dict[str, float]]:
        return {
            "input": {feature: float(self.input[idx]) for feature, idx in vocabulary.feature_index.items()},
            "output": {label: float(self.output[idx]) for label, idx in vocabulary.label_index.items()},
        }


@dataclass(slots=True)
class Prediction:
    feature: str
    score: float
    percentage: float


@dataclass(slots=True)
class PredictionResult:
    label: str
    features: list[str] = field(default_factory=list)
    predictions: list[Prediction] = field(default_factory=list)
