# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class LabelRankError(Exception):
    """Base class for errors raised by labelrank."""


class ConfigurationError(LabelRankError):
    """Missing column, empty dataset or invalid option."""


class ParseError(LabelRankError):
    def __init__(self, path: Path | str, message: str) -> None:
        self.path = str(path)
        super().__init__(f"Error reading '{self.path}': {message}")


class ValueCoercionWarning(UserWarning):
    """A cell could not be coerced to its declared type and was defaulted."""


@dataclass(slots=True)
class CoercionStats:
    numeric_defaults: int = 0
    boolean_defaults: int = 0

    @property
    def total(self) -> int:
        return self.numeric_defaults + self.boolean_defaults

    def summary(self) -> str:
        return f"{self.numeric_defaults} numeric value(s) defaulted to 0, {self.boolean_defaults} boolean value(s) defaulted to false"
