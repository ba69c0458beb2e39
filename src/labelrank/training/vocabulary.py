# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""Frozen feature/label index shared by training and inference."""
from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

from ..errors import ParseError
from ..schemas import Record
from .dataset import value_token


def normalize_token(value: object) -> str:
    return value_token(value).strip().lower()


def attribute_feature(name: str, value: object) -> str:
    """Feature token of one tabular attribute.

    Numeric and boolean values share the slot named after the attribute;
    string values are categorical and get one ``name=value`` slot each.
    """
    if isinstance(value, str):
        return normalize_token(f"{name}={value}")
    return normalize_token(name)


def _first_seen_index(tokens: Iterable[str]) -> dict[str, int]:
    index: dict[str, int] = {}
    for token in tokens:
        if token not in index:
            index[token] = len(index)
    return index


class Vocabulary:
    """Dense, order-stable index of features and labels.

    Built once per training run and persisted; inference reloads it verbatim
    instead of recomputing it, so indices match the trained model.
    """

    __slots__ = ("_feature_index", "_label_index")

    def __init__(self, features: Sequence[str], labels: Sequence[str]) -> None:
        self._feature_index = MappingProxyType(_first_seen_index(features))
        self._label_index = MappingProxyType(_first_seen_index(labels))

    @classmethod
    def from_label_map(cls, label_map: Mapping[str, Sequence[object]]) -> "Vocabulary":
        features = (normalize_token(feature) for values in label_map.values() for feature in values)
        labels = (normalize_token(label) for label in label_map)
        return cls(list(features), list(labels))

    @classmethod
    def from_records(cls, records: Sequence[Record]) -> "Vocabulary":
        features = (
            attribute_feature(name, value) for record in records for name, value in record.attributes.items()
        )
        labels = (normalize_token(record.target) for record in records)
        return cls(list(features), list(labels))

    @property
    def feature_index(self) -> Mapping[str, int]:
        return self._feature_index

    @property
    def label_index(self) -> Mapping[str, int]:
        return self._label_index

    @property
    def features(self) -> tuple[str, ...]:
        return tuple(self._feature_index)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(self._label_index)

    @property
    def n_features(self) -> int:
        return len(self._feature_index)

    @property
    def n_labels(self) -> int:
        return len(self._label_index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vocabulary):
            return NotImplemented
        return self.features == other.features and self.labels == other.labels

    def __repr__(self) -> str:
        return f"Vocabulary(n_features={self.n_features}, n_labels={self.n_labels})"

    def to_json(self) -> dict[str, list[str]]:
        return {"features": list(self.features), "labels": list(self.labels)}

    @classmethod
    def from_json(cls, payload: Any, *, path: Path | str = "<memory>") -> "Vocabulary":
        if not isinstance(payload, dict) or set(payload) != {"features", "labels"}:
            raise ParseError(path, "vocabulary must be an object with 'features' and 'labels' lists")
        for key in ("features", "labels"):
            values = payload[key]
            if not isinstance(values, list) or not all(isinstance(item, str) for item in values):
                raise ParseError(path, f"vocabulary '{key}' must be a list of strings")
            if len(set(values)) != len(values):
                raise ParseError(path, f"vocabulary '{key}' contains duplicates")
        return cls(payload["features"], payload["labels"])
