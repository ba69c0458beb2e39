# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""CSV label classifier with ranked, normalised predictions."""

from .config import DatasetConfig, LoadingOptions, RankingOptions, TrainingOptions
from .errors import ConfigurationError, LabelRankError, ParseError, ValueCoercionWarning
from .inference.predictor import Predictor, load_predictor
from .inference.ranker import rank_scores
from .schemas import Prediction, PredictionResult, Record, TrainingSample
from .training.vocabulary import Vocabulary

__all__ = [
    "ConfigurationError",
    "DatasetConfig",
    "LabelRankError",
    "LoadingOptions",
    "ParseError",
    "Prediction",
    "PredictionResult",
    "Predictor",
    "RankingOptions",
    "Record",
    "TrainingOptions",
    "TrainingSample",
    "ValueCoercionWarning",
    "Vocabulary",
    "load_predictor",
    "rank_scores",
]
