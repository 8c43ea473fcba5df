from typing import Dict, ClassVar, Type
from cloudtrail_streamer.utils.logger import logger
from cloudtrail_streamer.utils.exceptions import UnsupportedTypeError
from cloudtrail_streamer.sources.base import ObjectStore


class ObjectStoreFactory:
    """
    Factory for creating ObjectStore implementations.

    New object store types can be registered with the factory to make them
    available for creation.
    """

    REGISTRY: ClassVar[Dict[str, Type[ObjectStore]]] = {}

    @classmethod
    def register_object_store(cls, name: str, store_class: Type[ObjectStore]) -> None:
        cls.REGISTRY[name.lower()] = store_class

    @classmethod
    def create(cls, store_type: str, **kwargs) -> ObjectStore:
        """
        Create an ObjectStore implementation based on requested type.

        Args:
            store_type (str): The type of object store to create.
            **kwargs: Configuration parameters passed to the implementation.

        Returns:
            ObjectStore: An initialized ObjectStore implementation.

        Raises:
            UnsupportedTypeError: If the requested type is not supported.
        """
        normalized_type = store_type.lower()
        logger.debug(f"Creating object store of type: {normalized_type}")

        if normalized_type not in cls.REGISTRY:
            supported = list(cls.REGISTRY.keys())
            logger.error(
                f"Unsupported object store type: {store_type}. Supported types: {supported}"
            )
            raise UnsupportedTypeError(
                f"Unsupported object store type: {store_type}. Supported types: {supported}"
            )

        store_class = cls.REGISTRY[normalized_type]
        return store_class(**kwargs)
