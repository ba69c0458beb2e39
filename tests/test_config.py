"""
Tests for configuration structs, environment helpers and console output.
"""

import io
import math
import os
import unittest
from unittest import mock

from rich.console import Console

from labelrank.config import AttributeSpec, DatasetConfig, TrainingOptions, dataset_paths, parse_attribute_map
from labelrank.console import MLConsole, format_percentage
from labelrank.env import get_bool_env, get_env, get_int_env
from labelrank.errors import ConfigurationError, ParseError
from labelrank.log import setup_logging
from labelrank.schemas import Prediction, PredictionResult


class TestDatasetConfig(unittest.TestCase):
    """Parsing of datasetConfig.json payloads."""

    def test_from_dict(self):
        config = DatasetConfig.from_dict(
            {
                "label": "stroke",
                "labelType": "number",
                "attributeMap": {"bmi": {"name": "bmi", "type": "number"}, "gender": "gender"},
                "attributeDir": "vertical",
                "excludeColumns": ["id"],
            }
        )
        self.assertEqual(config.attribute_map["bmi"], AttributeSpec("bmi", "number"))
        self.assertEqual(config.attribute_map["gender"], AttributeSpec("gender", "string"))
        self.assertTrue(config.merge_targets)
        self.assertEqual(config.shape, "listed")
        self.assertEqual(config.exclude_columns, ("id",))
        self.assertEqual(config.loading_options().target_type, "number")

    def test_invalid_configs(self):
        for payload in (
            {},
            {"label": ""},
            {"label": "x", "shape": "wide"},
            {"label": "x", "labelType": "date"},
            {"label": "x", "attributeMap": ["a"]},
            {"label": "x", "attributeMap": {"a": {"type": "number"}}},
            {"label": "x", "attributeMap": {"a": {"name": "a", "type": "float"}}},
        ):
            with self.subTest(payload=payload):
                with self.assertRaises(ConfigurationError):
                    DatasetConfig.from_dict(payload).loading_options()

    def test_parse_attribute_map_keeps_specs(self):
        spec = AttributeSpec("age", "number")
        self.assertIs(parse_attribute_map({"Age": spec})["Age"], spec)

    def test_dataset_paths_from_env(self):
        with mock.patch.dict(os.environ, {"LABELRANK_DATASETS_DIR": "/data/in", "LABELRANK_TRAINED_DIR": "/data/out"}):
            paths = dataset_paths("02")
        self.assertEqual(str(paths.csv), os.path.join("/data/in", "02", "dataset.csv"))
        self.assertEqual(str(paths.model), os.path.join("/data/out", "02", "model.json"))


class TestTrainingOptions(unittest.TestCase):
    """Defaults per dataset shape and validation."""

    def test_shape_defaults(self):
        self.assertEqual(TrainingOptions.for_shape("listed").hidden_layers, (40,))
        tabular = TrainingOptions.for_shape("tabular")
        self.assertEqual(tabular.hidden_layers, (20,))
        self.assertEqual(tabular.activation, "sigmoid")
        self.assertEqual(TrainingOptions.for_shape("tabular", hidden_layers=[5, 5]).hidden_layers, (5, 5))

    def test_invalid_options(self):
        for overrides in ({"activation": "softmax"}, {"iterations": 0}, {"hidden_layers": ()}, {"solver": "newton"}):
            with self.subTest(overrides=overrides):
                with self.assertRaises(ConfigurationError):
                    TrainingOptions(**overrides)

    def test_to_dict(self):
        payload = TrainingOptions().to_dict()
        self.assertEqual(payload["hidden_layers"], [40])
        self.assertEqual(payload["iterations"], 1000)


class TestEnv(unittest.TestCase):
    """Environment helpers never raise."""

    def test_helpers(self):
        with mock.patch.dict(os.environ, {"LR_INT": "12", "LR_BAD": "x", "LR_FLAG": "yes", "LR_BLANK": "  "}):
            self.assertEqual(get_int_env("LR_INT", 0), 12)
            self.assertEqual(get_int_env("LR_BAD", 3), 3)
            self.assertTrue(get_bool_env("LR_FLAG", False))
            self.assertFalse(get_bool_env("LR_BAD", False))
            self.assertEqual(get_env("LR_BLANK", "d"), "d")
            self.assertIsNone(get_env("LR_MISSING"))


class TestOutput(unittest.TestCase):
    """Console rendering and logging setup."""

    def test_prediction_report(self):
        buffer = io.StringIO()
        console = MLConsole(console=Console(file=buffer, width=120, color_system=None))
        result = PredictionResult(
            label="flu",
            features=["fever", "cough"],
            predictions=[Prediction("flu", 0.75, 75.0), Prediction("cold", 0.25, math.nan)],
        )
        console.prediction_report([result])
        text = buffer.getvalue()
        self.assertIn("fever, cough", text)
        self.assertIn("0.7500000", text)
        self.assertIn("75.00%", text)
        self.assertIn("nan%", text)

    def test_format_percentage(self):
        self.assertEqual(format_percentage(33.333), "33.33%")
        self.assertEqual(format_percentage(math.nan), "nan%")

    def test_invalid_log_level(self):
        with self.assertRaises(ConfigurationError):
            setup_logging("LOUD")

    def test_parse_error_keeps_path(self):
        error = ParseError("trained/02/model.json", "boom")
        self.assertEqual(error.path, "trained/02/model.json")
        self.assertIn("trained/02/model.json", str(error))


if __name__ == "__main__":
    unittest.main()
