# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

import numpy as np

from ..config import DatasetConfig, RankingOptions, dataset_paths
from ..errors import ConfigurationError
from ..files import read_json
from ..log import get_logger
from ..schemas import PredictionResult, Record
from ..training.classifier import NeuralNetworkClassifier
from ..training.dataset import format_as_label_map, merge_records, records_from_json, value_token
from ..training.vectorizer import vectorize_attributes, vectorize_features
from ..training.vocabulary import Vocabulary
from .ranker import build_prediction_result

logger = get_logger(__name__)


class Predictor:
    """Read-only view over a trained model directory."""

    def __init__(self, *, model_dir: Path) -> None:
        self.model_dir = model_dir
        self.model_path = model_dir / "model.json"
        self.vocabulary_path = model_dir / "vocabulary.json"
        self.metadata_path = model_dir / "metadata.json"
        self.metadata: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        self.classifier = NeuralNetworkClassifier.deserialize(read_json(self.model_path), path=str(self.model_path))
        self.vocabulary = Vocabulary.from_json(read_json(self.vocabulary_path), path=self.vocabulary_path)
        if self.classifier.n_features != self.vocabulary.n_features or self.classifier.n_labels != self.vocabulary.n_labels:
            raise ConfigurationError(f"Model and vocabulary in {self.model_dir} do not match")
        if self.metadata_path.exists():
            payload = read_json(self.metadata_path)
            self.metadata = payload if isinstance(payload, dict) else {}

    @property
    def model_version(self) -> str:
        return str(self.metadata.get("model_version") or "unknown")

    def predict_scores(self, vector: np.ndarray) -> dict[str, float]:
        scores = self.classifier.predict(vector)
        return {label: float(scores[idx]) for label, idx in self.vocabulary.label_index.items()}

    def predict(self, features: Sequence[str], *, label: str = "", options: RankingOptions | None = None) -> PredictionResult:
        vector = vectorize_features(features, self.vocabulary)
        return build_prediction_result(label, features, self.predict_scores(vector), options)

    def predict_record(self, record: Record, options: RankingOptions | None = None) -> PredictionResult:
        vector = vectorize_attributes(record.attributes, self.vocabulary)
        features = [f"{name}={value_token(value)}" for name, value in record.attributes.items()]
        return build_prediction_result(value_token(record.target), features, self.predict_scores(vector), options)


def evaluate_listed(
    predictor: Predictor,
    label_map: Mapping[str, Sequence[str]],
    options: RankingOptions | None = None,
) -> list[PredictionResult]:
    return [predictor.predict(features, label=label, options=options) for label, features in label_map.items()]


def evaluate_tabular(
    predictor: Predictor,
    records: Sequence[Record],
    options: RankingOptions | None = None,
) -> list[PredictionResult]:
    return [predictor.predict_record(record, options) for record in records]


def evaluate_saved_model(
    name: str,
    *,
    dataset_dir: Path | None = None,
    trained_dir: Path | None = None,
    options: RankingOptions | None = None,
) -> list[PredictionResult]:
    """Replay the stored training records through the saved model."""
    paths = dataset_paths(name, dataset_dir=dataset_dir, trained_dir=trained_dir)
    config = DatasetConfig.from_dict(read_json(paths.config))
    predictor = Predictor(model_dir=paths.model_dir)
    records = records_from_json(read_json(paths.records), path=paths.records)
    if config.merge_targets:
        records = merge_records(records)
    logger.info("Testing '%s' with model %s on %d records", name, predictor.model_version, len(records))
    if config.shape == "tabular":
        return evaluate_tabular(predictor, records, options)
    return evaluate_listed(predictor, format_as_label_map(records), options)


_CACHE: dict[Path, Predictor] = {}


def load_predictor(name: str, *, trained_dir: Path | None = None) -> Predictor:
    model_dir = dataset_paths(name, trained_dir=trained_dir).model_dir
    cached = _CACHE.get(model_dir)
    if cached is None:
        cached = _CACHE[model_dir] = Predictor(model_dir=model_dir)
    return cached
