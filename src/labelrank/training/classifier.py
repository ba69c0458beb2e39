# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import warnings
from typing import Any

import numpy as np
from sklearn.exceptions import ConvergenceWarning
from sklearn.neural_network import MLPRegressor

from ..config import ACTIVATIONS, TrainingOptions
from ..errors import ConfigurationError, ParseError
from ..log import get_logger

logger = get_logger(__name__)

MODEL_TYPE = "mlp-regressor"


def _build_model(options: TrainingOptions) -> MLPRegressor:
    return MLPRegressor(
        hidden_layer_sizes=tuple(options.hidden_layers),
        activation=ACTIVATIONS[options.activation],
        solver=options.solver,
        learning_rate_init=options.learning_rate,
        momentum=options.momentum,
        max_iter=options.iterations,
        tol=options.error_thresh,
        random_state=options.random_state,
        verbose=options.log,
    )


class NeuralNetworkClassifier:
    """Feed-forward network producing one raw score per label slot.

    The output layer is linear, so scores are unbounded and may be negative.
    ``predict`` never touches the fitted parameters; a single instance can
    serve any number of predictions without being re-loaded.
    """

    def __init__(self, model: MLPRegressor | None = None, *, n_features: int = 0, n_labels: int = 0) -> None:
        self._model = model
        self.n_features = n_features
        self.n_labels = n_labels

    @property
    def trained(self) -> bool:
        return self._model is not None and hasattr(self._model, "coefs_")

    @classmethod
    def train(cls, inputs: np.ndarray, outputs: np.ndarray, options: TrainingOptions) -> "NeuralNetworkClassifier":
        if inputs.ndim != 2 or outputs.ndim != 2 or inputs.shape[0] != outputs.shape[0]:
            raise ConfigurationError(f"Mismatched training matrices: {inputs.shape} vs {outputs.shape}")
        if inputs.shape[0] == 0 or inputs.shape[1] == 0:
            raise ConfigurationError("The training frame is empty.")
        model = _build_model(options)
        # A single label slot is fitted as a 1-D target.
        target = outputs.ravel() if outputs.shape[1] == 1 else outputs
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", ConvergenceWarning)
            model.fit(inputs, target)
        for item in caught:
            if issubclass(item.category, ConvergenceWarning):
                logger.warning("Training stopped at %d iterations without converging", model.n_iter_)
            else:
                warnings.warn_explicit(item.message, item.category, item.filename, item.lineno)
        logger.info("Trained network on %d samples (loss=%.6f, iterations=%d)", inputs.shape[0], model.loss_, model.n_iter_)
        return cls(model, n_features=inputs.shape[1], n_labels=outputs.shape[1])

    def predict(self, vector: np.ndarray) -> np.ndarray:
        if not self.trained:
            raise ConfigurationError("The classifier has not been trained.")
        row = np.asarray(vector, dtype=np.float64).reshape(1, -1)
        if row.shape[1] != self.n_features:
            raise ConfigurationError(f"Expected {self.n_features} input features, got {row.shape[1]}")
        scores = self._model.predict(row)
        return np.asarray(scores, dtype=np.float64).reshape(-1)

    def serialize(self) -> dict[str, Any]:
        if not self.trained:
            raise ConfigurationError("The classifier has not been trained.")
        model = self._model
        return {
            "type": MODEL_TYPE,
            "n_features": self.n_features,
            "n_labels": self.n_labels,
            "params": {
                "hidden_layer_sizes": list(model.hidden_layer_sizes),
                "activation": model.activation,
                "solver": model.solver,
                "learning_rate_init": model.learning_rate_init,
                "momentum": model.momentum,
                "max_iter": model.max_iter,
                "tol": model.tol,
            },
            "coefs": [layer.tolist() for layer in model.coefs_],
            "intercepts": [layer.tolist() for layer in model.intercepts_],
            "n_iter": int(model.n_iter_),
            "loss": float(model.loss_),
        }

    @classmethod
    def deserialize(cls, payload: Any, *, path: str = "<memory>") -> "NeuralNetworkClassifier":
        if not isinstance(payload, dict) or payload.get("type") != MODEL_TYPE:
            raise ParseError(path, f"not a '{MODEL_TYPE}' model payload")
        try:
            params = dict(payload["params"])
            params["hidden_layer_sizes"] = tuple(params["hidden_layer_sizes"])
            coefs = [np.asarray(layer, dtype=np.float64) for layer in payload["coefs"]]
            intercepts = [np.asarray(layer, dtype=np.float64) for layer in payload["intercepts"]]
            n_features = int(payload["n_features"])
            n_labels = int(payload["n_labels"])
            model = MLPRegressor(**params)
        except (KeyError, TypeError, ValueError) as exc:
            raise ParseError(path, f"invalid model payload: {exc}") from exc
        if len(coefs) != len(intercepts) or not coefs or coefs[0].shape[0] != n_features:
            raise ParseError(path, "model layers do not match the declared input width")

        model.coefs_ = coefs
        model.intercepts_ = intercepts
        model.n_layers_ = len(coefs) + 1
        model.n_outputs_ = coefs[-1].shape[1]
        model.out_activation_ = "identity"
        model.n_features_in_ = n_features
        model.n_iter_ = int(payload.get("n_iter", 0))
        model.loss_ = float(payload.get("loss", 0.0))
        return cls(model, n_features=n_features, n_labels=n_labels)
