# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import math
from typing import Mapping, Sequence

from ..config import RankingOptions
from ..schemas import Prediction, PredictionResult


def sort_by_magnitude(scores: Mapping[str, float]) -> list[tuple[str, float]]:
    """Order entries by descending absolute score; ties keep input order."""
    return sorted(scores.items(), key=lambda item: abs(item[1]), reverse=True)


def rank_scores(scores: Mapping[str, float], options: RankingOptions | None = None) -> list[Prediction]:
    """Sort, filter, truncate and normalise a label -> score mapping.

    Percentages are taken against the sum of the filtered entries before
    ``top_n`` truncation, so a truncated list can sum to less (or, with
    mixed signs, more) than 100. A zero total yields NaN percentages.
    """
    options = options or RankingOptions()
    ordered = sort_by_magnitude(scores)
    if options.show_positive_only:
        ordered = [(label, score) for label, score in ordered if score > 0]
    limited = ordered[: options.top_n] if options.top_n > 0 else ordered

    total = sum(score for _label, score in ordered)
    predictions: list[Prediction] = []
    for label, score in limited:
        percentage = score / total * 100 if total != 0 else math.nan
        predictions.append(Prediction(feature=label, score=float(score), percentage=float(percentage)))
    return predictions


def build_prediction_result(
    label: str,
    features: Sequence[str],
    scores: Mapping[str, float],
    options: RankingOptions | None = None,
) -> PredictionResult:
    return PredictionResult(label=label, features=list(features), predictions=rank_scores(scores, options))
