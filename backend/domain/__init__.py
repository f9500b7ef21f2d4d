"""Domain layer definitions."""

from .dashboard import DashboardState, FetchRecord

__all__ = [
    "DashboardState",
    "FetchRecord",
]
