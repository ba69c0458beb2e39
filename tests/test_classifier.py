"""
Unit tests for the neural network adapter and its JSON persistence.
"""

import json
import unittest

import numpy as np

from labelrank.config import TrainingOptions
from labelrank.errors import ConfigurationError, ParseError
from labelrank.training.classifier import NeuralNetworkClassifier


class TestNeuralNetworkClassifier(unittest.TestCase):
    """Training, prediction and serialisation."""

    @classmethod
    def setUpClass(cls):
        cls.inputs = np.array(
            [
                [1.0, 1.0, 0.0, 0.0],
                [0.0, 1.0, 1.0, 0.0],
                [0.0, 0.0, 1.0, 1.0],
            ]
        )
        cls.outputs = np.eye(3)
        cls.options = TrainingOptions(iterations=300, hidden_layers=(8,))
        cls.classifier = NeuralNetworkClassifier.train(cls.inputs, cls.outputs, cls.options)

    def test_predict_shape(self):
        scores = self.classifier.predict(self.inputs[0])
        self.assertEqual(scores.shape, (3,))
        self.assertTrue(np.all(np.isfinite(scores)))

    def test_predict_has_no_side_effects(self):
        first = self.classifier.predict(self.inputs[1])
        self.classifier.predict(self.inputs[2])
        np.testing.assert_array_equal(first, self.classifier.predict(self.inputs[1]))

    def test_serialize_round_trip(self):
        payload = json.loads(json.dumps(self.classifier.serialize()))
        restored = NeuralNetworkClassifier.deserialize(payload)
        self.assertEqual(restored.n_features, 4)
        self.assertEqual(restored.n_labels, 3)
        for row in self.inputs:
            np.testing.assert_allclose(restored.predict(row), self.classifier.predict(row))

    def test_single_label(self):
        classifier = NeuralNetworkClassifier.train(self.inputs, np.ones((3, 1)), self.options)
        self.assertEqual(classifier.predict(self.inputs[0]).shape, (1,))
        restored = NeuralNetworkClassifier.deserialize(classifier.serialize())
        self.assertEqual(restored.predict(self.inputs[0]).shape, (1,))

    def test_width_mismatch(self):
        with self.assertRaises(ConfigurationError):
            self.classifier.predict(np.zeros(5))

    def test_untrained(self):
        with self.assertRaises(ConfigurationError):
            NeuralNetworkClassifier().predict(np.zeros(4))
        with self.assertRaises(ConfigurationError):
            NeuralNetworkClassifier().serialize()

    def test_empty_frame(self):
        with self.assertRaises(ConfigurationError):
            NeuralNetworkClassifier.train(np.zeros((0, 4)), np.zeros((0, 3)), self.options)
        with self.assertRaises(ConfigurationError):
            NeuralNetworkClassifier.train(np.zeros((3, 4)), np.zeros((2, 3)), self.options)

    def test_bad_payloads(self):
        good = self.classifier.serialize()
        for payload in (
            None,
            {"type": "brain.js"},
            {**good, "coefs": good["coefs"][:1]},
            {**good, "n_features": 7},
            {key: value for key, value in good.items() if key != "params"},
        ):
            with self.subTest(payload=str(payload)[:40]):
                with self.assertRaises(ParseError):
                    NeuralNetworkClassifier.deserialize(payload)


if __name__ == "__main__":
    unittest.main()
