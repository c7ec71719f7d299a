"""
Bridge configuration.

Selects the foreign engine and decides which activation function types force
a particular feature orientation on their foreign implementation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional
import logging

import yaml

from .engines.protocol import EngineConfig
from .host.activation_types import ActivationFunctionBaseType, ActivationFunctionTypeEnum
from .host.neurons import FeatureOrientation

logger = logging.getLogger(__name__)


def default_orientation_overrides() -> Dict[ActivationFunctionBaseType, Optional[FeatureOrientation]]:
    """Softmax kernels normalise down each column, so features must span columns."""
    return {
        ActivationFunctionBaseType[kind.name]: FeatureOrientation.COLUMNS_SPAN_FEATURE_SET
        for kind in ActivationFunctionTypeEnum
        if kind.is_softmax_family
    }


@dataclass
class BridgeConfig:
    """
    Complete bridge configuration.

    Attributes:
        engine: Registered engine name
        device: Engine device ("auto", "cuda", "mps", "cpu", "gpu")
        dtype: Engine dtype ("float16", "float32", "bfloat16")
        seed: Engine random seed
        orientation_overrides: Required foreign orientation per host base
            type; None (or a missing entry) means the caller's orientation
    """

    engine: str = "pytorch"
    device: str = "auto"
    dtype: str = "float32"
    seed: Optional[int] = None
    orientation_overrides: Dict[ActivationFunctionBaseType, Optional[FeatureOrientation]] = field(
        default_factory=default_orientation_overrides
    )

    def required_orientation(self, base_type: ActivationFunctionBaseType) -> Optional[FeatureOrientation]:
        return self.orientation_overrides.get(base_type)

    def to_engine_config(self, validate: bool = True) -> EngineConfig:
        return EngineConfig(
            engine_type=self.engine,
            device=self.device,
            dtype=self.dtype,
            seed=self.seed,
            validate=validate,
        )


def _parse_enum(enum_cls, value: str, what: str):
    try:
        return enum_cls[str(value).upper()]
    except KeyError:
        valid = [member.name for member in enum_cls]
        raise ValueError(f"Unknown {what}: {value}. Must be one of {valid}") from None


def load_bridge_config(config_path: str) -> BridgeConfig:
    """
    Load bridge configuration from a YAML file.

    Example:
        engine: pytorch
        device: cpu
        orientation_overrides:
          softmax: columns_span_feature_set
          sigmoid: rows_span_feature_set
          log_softmax: null

    Overrides are merged over the defaults.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        BridgeConfig instance

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file or its overrides are not mappings, or a base
            type or orientation name is unknown
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(
            f"Config must be a mapping at the top level, got {type(data).__name__}: {config_path}"
        )

    raw_overrides = data.get("orientation_overrides") or {}
    if not isinstance(raw_overrides, dict):
        raise ValueError(
            f"orientation_overrides must be a mapping, got {type(raw_overrides).__name__}"
        )

    overrides = default_orientation_overrides()
    for base_name, orientation_name in raw_overrides.items():
        base_type = _parse_enum(ActivationFunctionBaseType, base_name, "activation function base type")
        overrides[base_type] = (
            None
            if orientation_name is None
            else _parse_enum(FeatureOrientation, orientation_name, "feature orientation")
        )

    config = BridgeConfig(
        engine=data.get("engine", "pytorch"),
        device=data.get("device", "auto"),
        dtype=data.get("dtype", "float32"),
        seed=data.get("seed"),
        orientation_overrides=overrides,
    )
    logger.info(f"Loaded bridge config from {config_path}: engine={config.engine}")
    return config
