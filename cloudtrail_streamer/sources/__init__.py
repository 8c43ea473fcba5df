from cloudtrail_streamer.sources.base import ObjectReference, ObjectStore, StoredObject
from cloudtrail_streamer.sources.factory import ObjectStoreFactory
from cloudtrail_streamer.sources.s3 import S3ObjectStore

# Register the S3 object store with the factory
ObjectStoreFactory.register_object_store("s3", S3ObjectStore)

__all__ = [
    "ObjectReference",
    "ObjectStore",
    "StoredObject",
    "ObjectStoreFactory",
    "S3ObjectStore",
]
