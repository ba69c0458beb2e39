# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from .errors import ConfigurationError, ParseError
from .schemas import PredictionResult

REPORT_COLUMNS = ["label", "feature", "score", "percentage"]


def read_csv_rows(path: Path, *, delimiter: str = ",") -> list[list[str]]:
    """Read a delimited file into rows of cells, header included.

    Rows may have different lengths; blank lines are skipped.
    """
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.reader(handle, delimiter=delimiter, strict=True)
            return [row for row in reader if row]
    except OSError as exc:
        raise ParseError(path, exc.strerror or str(exc)) from exc
    except (csv.Error, UnicodeDecodeError) as exc:
        raise ParseError(path, str(exc)) from exc


def read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ParseError(path, exc.strerror or str(exc)) from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(path, str(exc)) from exc


def write_json(path: Path, data: Any, *, minify: bool = False) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if minify:
        text = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    else:
        text = json.dumps(data, ensure_ascii=False, indent=4)
    path.write_text(text + "\n", encoding="utf-8")


def results_to_dataframe(results: Iterable[PredictionResult]) -> pd.DataFrame:
    data = [
        {
            "label": result.label,
            "feature": prediction.feature,
            "score": float(prediction.score),
            "percentage": float(prediction.percentage),
        }
        for result in results
        for prediction in result.predictions
    ]
    return pd.DataFrame(data, columns=REPORT_COLUMNS)


def write_report_csv(path: Path, results: list[PredictionResult]) -> Path:
    frame = results_to_dataframe(results)
    if frame.empty:
        raise ConfigurationError("No predictions to write. Nothing to report.")
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, sep=";", index=False)
    return path
