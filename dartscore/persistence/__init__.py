"""
Persistence module - statistics store interface and reference stores.
"""
from .base import StatisticsStore
from .memory import InMemoryStatisticsStore, new_match_id
from .yaml_store import YamlStatisticsStore

__all__ = [
    "StatisticsStore",
    "InMemoryStatisticsStore",
    "YamlStatisticsStore",
    "new_match_id",
]
