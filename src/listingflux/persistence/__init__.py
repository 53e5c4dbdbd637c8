"""
Optional history storage for optimization results.
"""
from .database import HistoryStore, connect_history, redact_url
from .exceptions import DatabaseConnectionError, PersistenceError
from .repository import HistoryRepository
from .schema import OptimizationHistoryModel

__all__ = [
    "HistoryStore",
    "HistoryRepository",
    "OptimizationHistoryModel",
    "DatabaseConnectionError",
    "PersistenceError",
    "connect_history",
    "redact_url",
]
