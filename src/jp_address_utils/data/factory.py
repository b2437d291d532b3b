from __future__ import annotations

from typing import Any, ClassVar

from jp_address_utils.protocols import DatasetSourceProtocol


class DatasetSourceFactory:
    """Factory for creating dataset source instances.

    Supports registration of custom source types and creation of sources
    by type name.

    Example:
        >>> source = DatasetSourceFactory.create("json")
        >>> source = DatasetSourceFactory.create("json", path="data/ken_all.json")

        # Register custom source
        >>> DatasetSourceFactory.register("sqlite", SQLiteDatasetSource)
        >>> source = DatasetSourceFactory.create("sqlite", db_path="postal.db")
    """

    _registry: ClassVar[dict[str, type[DatasetSourceProtocol]]] = {}
    _default_type: ClassVar[str] = "json"
    _entity_name: ClassVar[str] = "dataset source"

    @classmethod
    def _ensure_defaults_registered(cls) -> None:
        """Register the built-in sources if they are missing."""
        if "json" not in cls._registry:
            from jp_address_utils.data.json_source import JSONDatasetSource

            cls._registry["json"] = JSONDatasetSource
        if "memory" not in cls._registry:
            from jp_address_utils.data.memory_source import InMemoryDatasetSource

            cls._registry["memory"] = InMemoryDatasetSource

    @classmethod
    def register(cls, name: str, impl_class: type[DatasetSourceProtocol]) -> None:
        """Register a source type.

        Args:
            name: Type name for the source.
            impl_class: Class implementing DatasetSourceProtocol.
        """
        cls._registry[name] = impl_class

    @classmethod
    def unregister(cls, name: str) -> None:
        """Unregister a source type."""
        cls._registry.pop(name, None)

    @classmethod
    def create(cls, source_type: str | None = None, **kwargs: Any) -> DatasetSourceProtocol:
        """Create a dataset source instance.

        Args:
            source_type: Type of source to create. Defaults to "json".
            **kwargs: Arguments to pass to the source constructor.

        Returns:
            Dataset source instance.

        Raises:
            ValueError: If the source type is not registered.
        """
        cls._ensure_defaults_registered()

        type_name = source_type if source_type is not None else cls._default_type
        if type_name not in cls._registry:
            available = ", ".join(sorted(cls._registry))
            raise ValueError(
                f"Unknown {cls._entity_name} type: {type_name}. Available types: {available}"
            )

        return cls._registry[type_name](**kwargs)

    @classmethod
    def available_types(cls) -> list[str]:
        """Get the sorted list of registered type names."""
        cls._ensure_defaults_registered()
        return sorted(cls._registry)

    @classmethod
    def clear_registry(cls) -> None:
        """Clear the registry (mainly for testing)."""
        cls._registry.clear()
