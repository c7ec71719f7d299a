"""
Unit tests for bridge configuration loading.
"""

import pytest

from activation_bridge.config import (
    BridgeConfig,
    default_orientation_overrides,
    load_bridge_config,
)
from activation_bridge.host import (
    ActivationFunctionBaseType,
    ActivationFunctionTypeEnum,
    FeatureOrientation,
)

COLUMNS = FeatureOrientation.COLUMNS_SPAN_FEATURE_SET
ROWS = FeatureOrientation.ROWS_SPAN_FEATURE_SET


class TestBridgeConfig:
    def test_defaults(self):
        config = BridgeConfig()

        assert config.engine == "pytorch"
        assert config.device == "auto"
        assert config.dtype == "float32"
        assert config.seed is None
        assert config.required_orientation(ActivationFunctionBaseType.SOFTMAX) is COLUMNS
        assert config.required_orientation(ActivationFunctionBaseType.LOG_SOFTMAX) is COLUMNS
        assert config.required_orientation(ActivationFunctionBaseType.RELU) is None

    def test_default_overrides_are_not_shared(self):
        first = BridgeConfig()
        first.orientation_overrides[ActivationFunctionBaseType.TANH] = ROWS

        assert ActivationFunctionBaseType.TANH not in BridgeConfig().orientation_overrides
        assert ActivationFunctionBaseType.TANH not in default_orientation_overrides()

    def test_to_engine_config(self):
        config = BridgeConfig(engine="mlx", device="gpu", dtype="float16", seed=5)

        engine_config = config.to_engine_config(validate=False)

        assert engine_config.engine_type == "mlx"
        assert engine_config.device == "gpu"
        assert engine_config.dtype == "float16"
        assert engine_config.seed == 5


class TestLoadBridgeConfig:
    def test_load(self, tmp_path):
        path = tmp_path / "bridge.yaml"
        path.write_text(
            "engine: pytorch\n"
            "device: cpu\n"
            "seed: 42\n"
            "orientation_overrides:\n"
            "  sigmoid: rows_span_feature_set\n"
            "  log_softmax: null\n"
        )

        config = load_bridge_config(str(path))

        assert config.device == "cpu"
        assert config.seed == 42
        assert config.required_orientation(ActivationFunctionBaseType.SIGMOID) is ROWS
        assert config.required_orientation(ActivationFunctionBaseType.LOG_SOFTMAX) is None
        assert config.required_orientation(ActivationFunctionBaseType.SOFTMAX) is COLUMNS

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        config = load_bridge_config(str(path))

        assert config == BridgeConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_bridge_config(str(tmp_path / "missing.yaml"))

    def test_unknown_base_type(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("orientation_overrides:\n  swish: rows_span_feature_set\n")

        with pytest.raises(ValueError, match="Unknown activation function base type"):
            load_bridge_config(str(path))

    def test_unknown_orientation(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("orientation_overrides:\n  softmax: diagonal\n")

        with pytest.raises(ValueError, match="Unknown feature orientation"):
            load_bridge_config(str(path))


class TestConfigValidation:
    def test_default_overrides_cover_softmax_family(self):
        overrides = default_orientation_overrides()

        softmax_family = {
            kind.name for kind in ActivationFunctionTypeEnum if kind.is_softmax_family
        }
        assert {base_type.name for base_type in overrides} == softmax_family
        assert set(overrides.values()) == {COLUMNS}

    @pytest.mark.parametrize("content", ["- engine\n- pytorch\n", "pytorch\n", "42\n"])
    def test_top_level_must_be_mapping(self, tmp_path, content):
        path = tmp_path / "bridge.yaml"
        path.write_text(content)

        with pytest.raises(ValueError, match="Config must be a mapping"):
            load_bridge_config(str(path))

    def test_overrides_must_be_mapping(self, tmp_path):
        path = tmp_path / "bridge.yaml"
        path.write_text("orientation_overrides:\n  - softmax\n")

        with pytest.raises(ValueError, match="orientation_overrides must be a mapping"):
            load_bridge_config(str(path))
