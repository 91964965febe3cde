"""
Dependency Injection Container.

This module provides a simple DI container for managing interface implementations.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Type, TypeVar

from core.logger import logger

T = TypeVar("T")


class Container:
    """
    Simple Dependency Injection Container.

    Supports:
    - Singleton instances (register)
    - Factory functions (register_factory)
    - Interface resolution (resolve)
    """

    _instances: Dict[Type, Any] = {}
    _providers: Dict[Type, Callable[[], Any]] = {}
    _initialized: bool = False

    @classmethod
    def register(cls, interface: Type[T], instance: Any) -> None:
        """
        Register a singleton instance for an interface.

        Args:
            interface: The interface type (e.g., IInferenceClient)
            instance: The implementation instance
        """
        cls._instances[interface] = instance

    @classmethod
    def register_factory(cls, interface: Type[T], factory: Callable[[], T]) -> None:
        """
        Register a factory function for an interface.
        Factory is called each time resolve() is called.

        Args:
            interface: The interface type
            factory: Factory function that returns an implementation
        """
        cls._providers[interface] = factory

    @classmethod
    def resolve(cls, interface: Type[T]) -> T:
        """
        Resolve an interface to its implementation.

        Raises:
            KeyError: If no implementation is registered for the interface
        """
        if interface in cls._instances:
            return cls._instances[interface]
        if interface in cls._providers:
            return cls._providers[interface]()
        raise KeyError(f"No provider registered for {interface.__name__}")

    @classmethod
    def is_registered(cls, interface: Type[T]) -> bool:
        return interface in cls._instances or interface in cls._providers

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations (useful for testing)."""
        cls._instances.clear()
        cls._providers.clear()
        cls._initialized = False

    @classmethod
    def is_initialized(cls) -> bool:
        """Check if container has been bootstrapped."""
        return cls._initialized

    @classmethod
    def _mark_initialized(cls) -> None:
        cls._initialized = True


def bootstrap_container(settings=None) -> None:
    """
    Initialize the dependency injection container.

    Registers:
    - RelayConfig -> built once from Settings
    - IInferenceClient -> HuggingFaceInferenceClient
    - IUploadStore -> TempUploadStore
    - ModelCatalog -> ModelCatalog over RelayConfig
    - TranscriptionRelayService -> service with injected dependencies

    Args:
        settings: Settings to build from (defaults to the cached environment settings)

    This function is idempotent - calling it multiple times has no effect
    after the first successful initialization.
    """
    if Container.is_initialized():
        return

    logger.info("Bootstrapping dependency injection container...")

    try:
        from core.config import RelayConfig, get_settings
        from interfaces.inference_client import IInferenceClient
        from interfaces.upload_store import IUploadStore
        from infrastructure.huggingface.inference_client import HuggingFaceInferenceClient
        from infrastructure.storage.upload_store import TempUploadStore
        from services.model_catalog import ModelCatalog
        from services.transcription import TranscriptionRelayService

        settings = settings or get_settings()
        config = RelayConfig.from_settings(settings)
        Container.register(RelayConfig, config)
        logger.info(
            f"Registered RelayConfig (models={list(config.models)}, "
            f"default={config.default_model_key}, credentials={config.has_credentials})"
        )

        Container.register(IInferenceClient, HuggingFaceInferenceClient(config))
        logger.info("Registered IInferenceClient -> HuggingFaceInferenceClient")

        Container.register(
            IUploadStore,
            TempUploadStore(
                temp_dir=Path(settings.temp_dir),
                max_size_bytes=settings.max_upload_size_bytes,
            ),
        )
        logger.info("Registered IUploadStore -> TempUploadStore")

        catalog = ModelCatalog(config)
        Container.register(ModelCatalog, catalog)

        service = TranscriptionRelayService(
            config=config,
            inference_client=Container.resolve(IInferenceClient),
            upload_store=Container.resolve(IUploadStore),
            catalog=catalog,
        )
        Container.register(TranscriptionRelayService, service)
        logger.info("Registered TranscriptionRelayService with DI")

        Container._mark_initialized()
        logger.info("Dependency injection container bootstrapped successfully")

    except Exception as e:
        logger.error(f"Failed to bootstrap container: {e}")
        logger.exception("Container bootstrap error details:")
        raise


def _resolve(interface: Type[T]) -> T:
    if not Container.is_initialized():
        bootstrap_container()
    return Container.resolve(interface)


def get_relay_config():
    from core.config import RelayConfig

    return _resolve(RelayConfig)


def get_inference_client():
    from interfaces.inference_client import IInferenceClient

    return _resolve(IInferenceClient)


def get_upload_store():
    from interfaces.upload_store import IUploadStore

    return _resolve(IUploadStore)


def get_model_catalog():
    from services.model_catalog import ModelCatalog

    return _resolve(ModelCatalog)


def get_relay_service():
    from services.transcription import TranscriptionRelayService

    return _resolve(TranscriptionRelayService)
