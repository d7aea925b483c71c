"""
Application bootstrap for pacdb.

Registers the core services in the DI container. Call once at startup.
"""

from pathlib import Path

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger

_initialized = False


def bootstrap(config_path: Path | None = None) -> ServiceContainer:
    """
    Bootstrap the pacdb application.

    Args:
        config_path: Optional explicit config file used to configure logging

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    _register_core_services(container, config_path)

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, config_path: Path | None) -> None:
    """Register core application services."""
    from ..core.settings import load_settings
    from ..services.logging import PacdbLogger

    # Loaded before ILogger is registered, so config warnings go to the NullLogger.
    logging_config = load_settings(config_path=config_path).logging

    def create_logger() -> ILogger:
        return PacdbLogger.from_config(logging_config)

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
