# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Sequence

from ..config import DatasetConfig, TrainingOptions, dataset_paths
from ..errors import ConfigurationError
from ..files import read_csv_rows, read_json, write_json
from ..log import get_logger
from ..schemas import Record
from .classifier import NeuralNetworkClassifier
from .dataset import format_as_label_map, load_records, records_to_json, to_dataframe
from .vectorizer import build_tabular_samples, build_training_samples, stack_samples
from .vocabulary import Vocabulary

logger = get_logger(__name__)


def _timestamp_key() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


@dataclass(slots=True)
class TrainedModel:
    classifier: NeuralNetworkClassifier
    vocabulary: Vocabulary
    shape: str


def train_listed(label_map: Mapping[str, Sequence[object]], options: TrainingOptions | None = None) -> TrainedModel:
    if not label_map:
        raise ConfigurationError("The dataset is empty.")
    vocabulary = Vocabulary.from_label_map(label_map)
    if vocabulary.n_features == 0:
        raise ConfigurationError("The dataset has no features to train on.")
    inputs, outputs = stack_samples(build_training_samples(label_map, vocabulary))
    classifier = NeuralNetworkClassifier.train(inputs, outputs, options or TrainingOptions.for_shape("listed"))
    return TrainedModel(classifier=classifier, vocabulary=vocabulary, shape="listed")


def train_tabular(
    records: Sequence[Record],
    options: TrainingOptions | None = None,
    *,
    target_type: str = "string",
) -> TrainedModel:
    if not records:
        raise ConfigurationError("The dataset is empty.")
    vocabulary = Vocabulary.from_records(records)
    if vocabulary.n_features == 0:
        raise ConfigurationError("The dataset has no attribute columns to train on.")
    samples = build_tabular_samples(records, vocabulary, target_type=target_type)
    inputs, outputs = stack_samples(samples)
    classifier = NeuralNetworkClassifier.train(inputs, outputs, options or TrainingOptions.for_shape("tabular"))
    return TrainedModel(classifier=classifier, vocabulary=vocabulary, shape="tabular")


def train_records(records: Sequence[Record], config: DatasetConfig, options: TrainingOptions | None = None) -> TrainedModel:
    if config.shape == "tabular":
        return train_tabular(records, options, target_type=config.label_type)
    return train_listed(format_as_label_map(records), options)


def train_and_export(
    name: str,
    *,
    dataset_dir: Path | None = None,
    trained_dir: Path | None = None,
    options: TrainingOptions | None = None,
) -> dict[str, Any]:
    """Load ``<dataset_dir>/<name>``, train a model and write its artifacts.

    Writes ``input.json`` (normalised records), ``vocabulary.json``,
    ``model.json`` and ``metadata.json`` under ``<trained_dir>/<name>``.
    """
    paths = dataset_paths(name, dataset_dir=dataset_dir, trained_dir=trained_dir)
    config = DatasetConfig.from_dict(read_json(paths.config))
    options = options or TrainingOptions.for_shape(config.shape)
    logger.info("Training '%s' (%s shape) from %s", name, config.shape, paths.csv)

    records = load_records(config, read_csv_rows(paths.csv))
    if not records:
        raise ConfigurationError(f"The dataset '{paths.csv}' is empty.")
    trained = train_records(records, config, options)
    write_json(paths.records, records_to_json(records), minify=True)
    write_json(paths.vocabulary, trained.vocabulary.to_json())
    write_json(paths.model, trained.classifier.serialize(), minify=True)

    frame = to_dataframe(records)
    metadata = {
        "model_version": _timestamp_key(),
        "created_at_utc": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "dataset": name,
        "shape": config.shape,
        "rows_total": int(len(frame)),
        "targets_distinct": int(frame["target"].astype(str).nunique()),
        "attribute_columns": int(frame.shape[1] - 1),
        "features": trained.vocabulary.n_features,
        "labels": trained.vocabulary.n_labels,
        "training_options": options.to_dict(),
    }
    write_json(paths.metadata, metadata)
    logger.info("Model saved to %s", paths.model)

    return {
        "metadata": metadata,
        "paths": {
            "records": str(paths.records),
            "vocabulary": str(paths.vocabulary),
            "model": str(paths.model),
            "metadata": str(paths.metadata),
        },
    }
