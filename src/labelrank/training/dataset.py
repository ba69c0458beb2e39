# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import math
import re
import warnings
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

from ..config import AttributeSpec, DatasetConfig, LoadingOptions, parse_attribute_map
from ..errors import CoercionStats, ConfigurationError, ParseError, ValueCoercionWarning
from ..files import read_csv_rows
from ..log import get_logger
from ..schemas import AttributeValue, Record

logger = get_logger(__name__)

FLOAT_PREFIX_RE = re.compile(r"^\s*([+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))")


def parse_float(value: object) -> float | None:
    """Parse the leading decimal number of ``value``; None when there is none."""
    if value is None:
        return None
    match = FLOAT_PREFIX_RE.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def to_number(value: object) -> float:
    """Numeric cast of a whole cell; unparsable text yields NaN."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    text = "" if value is None else str(value).strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return math.nan


def value_token(value: object) -> str:
    """String form of an attribute or target value, as used by the vocabulary."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return "" if value is None else str(value)


def _is_empty(value: str | None) -> bool:
    return value is None or value == ""


def _coerce(raw: str | None, spec: AttributeSpec, stats: CoercionStats) -> AttributeValue:
    if spec.type == "number":
        parsed = parse_float(raw)
        if parsed is None:
            stats.numeric_defaults += 1
            return 0.0
        return parsed
    if spec.type == "boolean":
        if raw not in ("true", "false"):
            stats.boolean_defaults += 1
        return raw == "true"
    return (raw or "").strip()


def normalize_rows(
    rows: Sequence[Sequence[str]],
    attribute_map: Mapping[str, Any],
    options: LoadingOptions,
    stats: CoercionStats | None = None,
) -> list[Record]:
    """Turn raw CSV rows (header first) into Records.

    Only columns present in ``attribute_map`` become attributes. Numeric
    cells that do not parse default to 0 and booleans are true only for the
    literal ``"true"``; both cases are counted in ``stats``.
    """
    if not rows:
        raise ConfigurationError("The CSV has no header row.")
    specs = parse_attribute_map(attribute_map)
    stats = stats if stats is not None else CoercionStats()
    headers = list(rows[0])
    if options.column_name not in headers:
        raise ConfigurationError(f'Target attr "{options.column_name}" not found in the CSV.')
    target_index = headers.index(options.column_name)

    records: list[Record] = []
    for row in rows[1:]:
        attrs: dict[str, AttributeValue] = {}
        for idx, header in enumerate(headers):
            raw = row[idx] if idx < len(row) else None
            if options.remove_empty_vals and _is_empty(raw):
                continue
            spec = specs.get(header)
            if spec is None:
                continue
            attrs[spec.name] = _coerce(raw, spec, stats)

        target_raw = row[target_index] if target_index < len(row) else None
        if options.remove_empty_vals and _is_empty(target_raw):
            continue
        if options.target_type == "number":
            target: str | float = to_number(target_raw)
        else:
            target = "" if target_raw is None else str(target_raw)
        records.append(Record(target=target, attributes=attrs, column=options.column_name))

    if stats.total:
        message = f"Lenient coercion while loading '{options.column_name}' rows: {stats.summary()}"
        logger.info(message)
        warnings.warn(message, ValueCoercionWarning, stacklevel=2)
    return records


def load_dataset_csv(path: Path, attribute_map: Mapping[str, Any], options: LoadingOptions) -> list[Record]:
    return normalize_rows(read_csv_rows(path), attribute_map, options)


def _merge_attributes(target: dict[str, AttributeValue], incoming: Mapping[str, AttributeValue]) -> None:
    for key, value in incoming.items():
        merged_key = key
        index = 1
        while merged_key in target:
            index += 1
            merged_key = f"{key}_{index}"
        target[merged_key] = value


def merge_records(records: Iterable[Record]) -> list[Record]:
    """Fold records sharing a target into one, keeping every attribute.

    Colliding attribute names are suffixed ``_2``, ``_3``... Output follows
    first-seen target order.
    """
    merged: dict[str, Record] = {}
    for record in records:
        key = value_token(record.target)
        existing = merged.get(key)
        if existing is None:
            merged[key] = Record(target=record.target, attributes=dict(record.attributes), column=record.column)
        else:
            _merge_attributes(existing.attributes, record.attributes)
    return list(merged.values())


def format_as_label_map(records: Iterable[Record]) -> dict[str, list[str]]:
    label_map: dict[str, list[str]] = {}
    for record in records:
        label_map[value_token(record.target)] = [value_token(value) for value in record.attributes.values()]
    return label_map


def _is_blank_listed_cell(cell: str) -> bool:
    return not cell.replace("_", " ", 1).strip()


def load_listed_records(rows: Sequence[Sequence[str]], *, drop_duplicate_values: bool = True) -> list[Record]:
    """Read headerless rows of ``target, value, value, ...``.

    Blank value cells are skipped and, with ``drop_duplicate_values``, a
    value already seen for the same target anywhere in the file is dropped.
    Rows left without values produce no record.
    """
    seen: dict[str, set[str]] = {}
    records: list[Record] = []
    for row in rows:
        if not row:
            continue
        target = row[0]
        target_seen = seen.setdefault(target, set())
        values: list[str] = []
        for cell in row[1:]:
            if _is_blank_listed_cell(cell):
                continue
            if drop_duplicate_values:
                if cell in target_seen:
                    continue
                target_seen.add(cell)
            values.append(cell)
        if not values:
            continue
        attrs: dict[str, AttributeValue] = {f"value_{idx}": value for idx, value in enumerate(values, 1)}
        records.append(Record(target=target, attributes=attrs))
    return records


def load_tabular_records(
    rows: Sequence[Sequence[str]],
    target_column: str,
    exclude_columns: Sequence[str] = (),
    *,
    target_type: str = "string",
    stats: CoercionStats | None = None,
) -> list[Record]:
    """Read a header + rows table where every non-target column is numeric."""
    if not rows:
        raise ConfigurationError("The CSV has no header row.")
    excluded = set(exclude_columns) | {target_column}
    attribute_map = {header: AttributeSpec(name=header, type="number") for header in rows[0] if header not in excluded}
    options = LoadingOptions(column_name=target_column, target_type=target_type, remove_empty_vals=False)
    return normalize_rows(rows, attribute_map, options, stats)


def load_records(config: DatasetConfig, rows: Sequence[Sequence[str]]) -> list[Record]:
    """Dispatch raw rows to the loader matching ``config`` and merge when asked."""
    if config.shape == "tabular":
        if config.attribute_map:
            records = normalize_rows(rows, config.attribute_map, config.loading_options())
        else:
            records = load_tabular_records(rows, config.label, config.exclude_columns, target_type=config.label_type)
        return merge_records(records) if config.merge_targets else records

    if config.attribute_map:
        records = normalize_rows(rows, config.attribute_map, config.loading_options())
        return merge_records(records) if config.merge_targets else records
    return merge_records(load_listed_records(rows))


def records_to_json(records: Iterable[Record]) -> list[dict[str, Any]]:
    return [{"target": record.target, "column": record.column, "attributes": dict(record.attributes)} for record in records]


def records_from_json(payload: Any, *, path: Path | str = "<memory>") -> list[Record]:
    if not isinstance(payload, list):
        raise ParseError(path, "expected a list of records")
    records: list[Record] = []
    for item in payload:
        if not isinstance(item, dict) or "target" not in item or not isinstance(item.get("attributes"), dict):
            raise ParseError(path, f"invalid record entry: {item!r}")
        records.append(
            Record(target=item["target"], attributes=dict(item["attributes"]), column=str(item.get("column") or ""))
        )
    return records


def to_dataframe(records: Iterable[Record]) -> pd.DataFrame:
    data = [{"target": record.target, **record.attributes} for record in records]
    return pd.DataFrame(data)
