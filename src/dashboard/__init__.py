from src.dashboard.dashboard_controller import DashboardController
from src.dashboard.fetch_orchestrator import FetchOrchestrator
from src.dashboard.models import (
    CacheEntry,
    DerivedStats,
    ErrorInfo,
    FetchStatus,
    PlayerRow,
    QueryKey,
    ResultSet,
    Selection,
)
from src.dashboard.parameter_store import InvalidParameter, ParameterStore
from src.dashboard.projection import project
from src.dashboard.query_key import derive_key
from src.dashboard.view_state import Empty, Error, Loading, Ready, ViewStateMachine

__all__ = [
    "CacheEntry",
    "DashboardController",
    "DerivedStats",
    "Empty",
    "Error",
    "ErrorInfo",
    "FetchOrchestrator",
    "FetchStatus",
    "InvalidParameter",
    "Loading",
    "ParameterStore",
    "PlayerRow",
    "QueryKey",
    "Ready",
    "ResultSet",
    "Selection",
    "ViewStateMachine",
    "derive_key",
    "project",
]
