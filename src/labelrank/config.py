# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Mapping

from .env import get_env
from .errors import ConfigurationError

ATTRIBUTE_TYPES = ("string", "number", "boolean")
TARGET_TYPES = ("string", "number")
ACTIVATIONS = {
    "sigmoid": "logistic",
    "relu": "relu",
    "leaky-relu": "relu",
    "tanh": "tanh",
}
SOLVERS = ("adam", "sgd", "lbfgs")
SHAPES = ("listed", "tabular")


@dataclass(frozen=True, slots=True)
class AttributeSpec:
    name: str
    type: str = "string"

    def __post_init__(self) -> None:
        if self.type not in ATTRIBUTE_TYPES:
            raise ConfigurationError(f"Unknown attribute type '{self.type}' for '{self.name}'")


def parse_attribute_map(raw: Mapping[str, Any]) -> dict[str, AttributeSpec]:
    """Normalise a header -> mapping config into AttributeSpec values.

    A bare string is shorthand for a string-typed attribute of that name;
    a mapping must carry ``name`` and may carry ``type``.
    """
    parsed: dict[str, AttributeSpec] = {}
    for header, mapping in raw.items():
        if isinstance(mapping, AttributeSpec):
            parsed[str(header)] = mapping
        elif isinstance(mapping, str):
            parsed[str(header)] = AttributeSpec(name=mapping)
        elif isinstance(mapping, Mapping) and "name" in mapping:
            parsed[str(header)] = AttributeSpec(name=str(mapping["name"]), type=str(mapping.get("type", "string")))
        else:
            raise ConfigurationError(f"Invalid attribute mapping for column '{header}': {mapping!r}")
    return parsed


@dataclass(frozen=True, slots=True)
class LoadingOptions:
    column_name: str
    target_type: str = "string"
    # Accepted for config compatibility; no dedup rule is applied.
    remove_duplicate_targets: bool = True
    remove_empty_vals: bool = True

    def __post_init__(self) -> None:
        if self.target_type not in TARGET_TYPES:
            raise ConfigurationError(f"Unknown target type '{self.target_type}'")


@dataclass(frozen=True, slots=True)
class TrainingOptions:
    iterations: int = 1000
    error_thresh: float = 0.00005
    learning_rate: float = 0.001
    momentum: float = 0.9
    hidden_layers: tuple[int, ...] = (40,)
    activation: str = "leaky-relu"
    solver: str = "adam"
    log: bool = False
    random_state: int | None = 42

    def __post_init__(self) -> None:
        if self.activation not in ACTIVATIONS:
            raise ConfigurationError(
                f"Unknown activation '{self.activation}' (expected one of {', '.join(sorted(ACTIVATIONS))})"
            )
        if self.solver not in SOLVERS:
            raise ConfigurationError(f"Unknown solver '{self.solver}' (expected one of {', '.join(SOLVERS)})")
        if self.iterations <= 0:
            raise ConfigurationError(f"iterations must be positive, got {self.iterations}")
        if not self.hidden_layers or any(size <= 0 for size in self.hidden_layers):
            raise ConfigurationError(f"Invalid hidden layers: {self.hidden_layers!r}")

    @classmethod
    def for_shape(cls, shape: str, **overrides: Any) -> "TrainingOptions":
        if shape == "tabular":
            base: dict[str, Any] = {"hidden_layers": (20,), "activation": "sigmoid"}
        else:
            base = {}
        base.update(overrides)
        if "hidden_layers" in base:
            base["hidden_layers"] = tuple(int(size) for size in base["hidden_layers"])
        return cls(**base)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["hidden_layers"] = list(self.hidden_layers)
        return payload


@dataclass(frozen=True, slots=True)
class RankingOptions:
    top_n: int = 0
    show_positive_only: bool = False

    def __post_init__(self) -> None:
        if self.top_n < 0:
            raise ConfigurationError(f"top_n must be >= 0, got {self.top_n}")


@dataclass(frozen=True, slots=True)
class DatasetConfig:
    label: str
    label_type: str = "string"
    attribute_map: dict[str, AttributeSpec] = field(default_factory=dict)
    attribute_dir: str = "horizontal"
    shape: str = "listed"
    exclude_columns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.shape not in SHAPES:
            raise ConfigurationError(f"Unknown dataset shape '{self.shape}'")

    @property
    def merge_targets(self) -> bool:
        return self.attribute_dir == "vertical"

    def loading_options(self) -> LoadingOptions:
        return LoadingOptions(column_name=self.label, target_type=self.label_type)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DatasetConfig":
        label = payload.get("label")
        if not isinstance(label, str) or not label:
            raise ConfigurationError("Dataset config is missing the 'label' column name")
        raw_map = payload.get("attributeMap") or {}
        if not isinstance(raw_map, Mapping):
            raise ConfigurationError("'attributeMap' must be an object")
        return cls(
            label=label,
            label_type=str(payload.get("labelType") or "string"),
            attribute_map=parse_attribute_map(raw_map),
            attribute_dir=str(payload.get("attributeDir") or "horizontal"),
            shape=str(payload.get("shape") or "listed"),
            exclude_columns=tuple(str(column) for column in payload.get("excludeColumns") or ()),
        )


@dataclass(frozen=True, slots=True)
class DatasetPaths:
    name: str
    dataset_dir: Path
    trained_dir: Path

    @property
    def csv(self) -> Path:
        return self.dataset_dir / self.name / "dataset.csv"

    @property
    def config(self) -> Path:
        return self.dataset_dir / self.name / "datasetConfig.json"

    @property
    def model_dir(self) -> Path:
        return self.trained_dir / self.name

    @property
    def records(self) -> Path:
        return self.model_dir / "input.json"

    @property
    def model(self) -> Path:
        return self.model_dir / "model.json"

    @property
    def vocabulary(self) -> Path:
        return self.model_dir / "vocabulary.json"

    @property
    def metadata(self) -> Path:
        return self.model_dir / "metadata.json"


def dataset_paths(name: str, *, dataset_dir: Path | None = None, trained_dir: Path | None = None) -> DatasetPaths:
    datasets_root = dataset_dir or Path(get_env("LABELRANK_DATASETS_DIR", "datasets") or "datasets")
    trained_root = trained_dir or Path(get_env("LABELRANK_TRAINED_DIR", "trained") or "trained")
    return DatasetPaths(name=name, dataset_dir=datasets_root, trained_dir=trained_root)
