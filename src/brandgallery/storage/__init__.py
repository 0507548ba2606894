"""Object store abstractions."""

from .providers import (
    ObjectStore,
    GCSObjectStore,
    LocalObjectStore,
    MemoryObjectStore,
    create_object_store,
)

__all__ = [
    "ObjectStore",
    "GCSObjectStore",
    "LocalObjectStore",
    "MemoryObjectStore",
    "create_object_store",
]
