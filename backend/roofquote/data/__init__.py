"""Configuration data layer for the roofquote pipeline."""

from roofquote.data.cache import SnapshotCache
from roofquote.data.repository import ConfigurationStore, InMemoryConfigurationStore

__all__ = [
    "ConfigurationStore",
    "InMemoryConfigurationStore",
    "SnapshotCache",
]
