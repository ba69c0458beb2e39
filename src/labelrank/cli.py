# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from .config import RankingOptions
from .console import MLConsole
from .env import get_int_env
from .errors import LabelRankError
from .files import write_report_csv
from .inference.predictor import evaluate_saved_model
from .log import setup_logging
from .training.trainer import train_and_export


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="labelrank",
        description="Train a label classifier on a CSV dataset or rank its predictions.",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--train", action="store_true", help="Train a model from datasets/<name>/dataset.csv")
    mode.add_argument("--test", action="store_true", help="Rank predictions of the trained model for every stored label")
    parser.add_argument("--dataset", required=True, help="Dataset name (directory under the datasets root)")
    parser.add_argument("--datasets-dir", type=Path, default=None, help="Datasets root (LABELRANK_DATASETS_DIR)")
    parser.add_argument("--trained-dir", type=Path, default=None, help="Trained models root (LABELRANK_TRAINED_DIR)")
    parser.add_argument("--top-n", type=int, default=get_int_env("LABELRANK_TOP_N", 0), help="Keep only the N strongest predictions (0 = all)")
    parser.add_argument("--all-scores", action="store_true", help="Also show non-positive scores")
    parser.add_argument("--report", type=Path, default=None, help="Write predictions to a ';'-separated CSV file")
    parser.add_argument("--log-level", default=None, help="Logging level (LABELRANK_LOG_LEVEL)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    console = MLConsole()
    try:
        setup_logging(args.log_level)
        if args.train:
            console.banner(f"Training dataset '{args.dataset}'")
            summary = train_and_export(args.dataset, dataset_dir=args.datasets_dir, trained_dir=args.trained_dir)
            metadata = summary["metadata"]
            console.metrics_table(
                {key: metadata[key] for key in ("rows_total", "targets_distinct", "features", "labels")},
                title=f"Dataset {args.dataset}",
            )
            console.success(f"Training completed. Model saved to: {summary['paths']['model']}")
            return 0

        options = RankingOptions(top_n=args.top_n, show_positive_only=not args.all_scores)
        console.banner(f"Testing dataset '{args.dataset}'")
        results = evaluate_saved_model(
            args.dataset, dataset_dir=args.datasets_dir, trained_dir=args.trained_dir, options=options
        )
        console.prediction_report(results)
        console.info(f"{len(results)} label(s) ranked")
        if args.report is not None:
            console.success(f"Report written to {write_report_csv(args.report, results)}")
        return 0
    except LabelRankError as exc:
        console.warn(str(exc))
        return 1
