"""
Engine Factory - Registry of foreign engines.

Engines register under a short name ("pytorch", "mlx"). Built-in engines are
imported lazily the first time they are asked for, so importing this package
never pulls in torch or mlx.
"""

from typing import Dict, Optional, Type, List
import importlib
import logging

from .protocol import EngineProtocol, EngineConfig

logger = logging.getLogger(__name__)

BUILTIN_ENGINES: Dict[str, str] = {
    "pytorch": "activation_bridge.engines.pytorch",
    "mlx": "activation_bridge.engines.mlx",
}


class EngineRegistry:
    """Name -> engine class mapping shared by the whole process."""

    _engines: Dict[str, Type[EngineProtocol]] = {}

    @classmethod
    def register(cls, name: str, engine_class: Type[EngineProtocol]) -> None:
        """
        Register an engine implementation.

        Re-registering a name replaces the previous class with a warning.
        """
        name = name.lower()
        if name in cls._engines:
            logger.warning(
                f"Engine '{name}' already registered. Overwriting with {engine_class}"
            )

        cls._engines[name] = engine_class
        logger.info(f"Registered engine: {name} -> {engine_class.__name__}")

    @classmethod
    def create(cls, config: EngineConfig) -> EngineProtocol:
        """
        Instantiate the engine named by a configuration.

        Args:
            config: Engine configuration

        Returns:
            Initialized engine

        Raises:
            ValueError: If no engine is registered under config.engine_type
        """
        engine_type = config.engine_type.lower()
        load_builtin_engine(engine_type)

        engine_class = cls._engines.get(engine_type)
        if engine_class is None:
            raise ValueError(
                f"Unknown engine: {engine_type}. "
                f"Available engines: {', '.join(cls._engines) or 'none'}"
            )

        logger.info(f"Creating {engine_type} engine with config: {config}")
        return engine_class(config)

    @classmethod
    def list_engines(cls) -> List[str]:
        return list(cls._engines)

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name.lower() in cls._engines

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove an engine (used by tests)."""
        if cls._engines.pop(name.lower(), None) is not None:
            logger.info(f"Unregistered engine: {name}")


def load_builtin_engine(name: str) -> None:
    """
    Import a built-in engine package so that it registers itself.

    Names that are not built in are left alone. A built-in engine whose
    library is not installed raises ImportError.
    """
    module_name = BUILTIN_ENGINES.get(name.lower())
    if module_name is not None and not EngineRegistry.is_registered(name):
        importlib.import_module(module_name)


def create_engine(
    engine_type: str,
    device: str = "auto",
    dtype: str = "float32",
    seed: Optional[int] = None,
) -> EngineProtocol:
    """
    Create an engine from keyword arguments.

    Example:
        >>> engine = create_engine("pytorch", device="cpu")
        >>> relu = engine.get_activation_function(ActivationFunctionTypeEnum.RELU)
    """
    load_builtin_engine(engine_type)
    config = EngineConfig(engine_type=engine_type, device=device, dtype=dtype, seed=seed)
    return EngineRegistry.create(config)


def register_engine(name: str):
    """
    Class decorator registering an engine.

    Example:
        @register_engine("pytorch")
        class PyTorchEngine:
            ...
    """

    def decorator(cls):
        EngineRegistry.register(name, cls)
        return cls

    return decorator
