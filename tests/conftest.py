"""
Pytest configuration for activation-bridge tests.
"""

import numpy as np
import pytest

from activation_bridge.host import (
    FeatureOrientation,
    MatrixFactory,
    Neurons,
    NeuronsActivation,
    NeuronsActivationContext,
)


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests"
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests by default unless --run-slow is passed."""
    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def matrix_factory():
    return MatrixFactory()


@pytest.fixture
def context(matrix_factory):
    """Inference context."""
    return NeuronsActivationContext(matrix_factory, training_context=False)


@pytest.fixture
def examples_by_features():
    """3 examples x 4 features, mixed signs."""
    return np.array(
        [
            [-1.5, 0.0, 2.0, -0.25],
            [3.0, -2.0, 0.5, 1.0],
            [-0.75, 4.0, -3.0, 0.0],
        ],
        dtype=np.float32,
    )


@pytest.fixture
def rows_activation(examples_by_features):
    """3x4 activation whose rows span the feature set."""
    return NeuronsActivation(
        examples_by_features, FeatureOrientation.ROWS_SPAN_FEATURE_SET, Neurons(4)
    )


@pytest.fixture
def pytorch_engine():
    pytest.importorskip("torch")
    from activation_bridge.engines import create_engine

    return create_engine("pytorch", device="cpu", dtype="float32", seed=42)
