"""Remote data store backends."""

from .base import Constraint, DataStore, Record, equals
from .bubble import BubbleStore
from .memory import MemoryStore

__all__ = ["BubbleStore", "Constraint", "DataStore", "MemoryStore", "Record", "equals"]
