"""Application services."""

from .dashboard import (
    DashboardService,
    configure_dashboard_service,
    get_dashboard_service,
    reset_dashboard_state,
)

__all__ = [
    "DashboardService",
    "configure_dashboard_service",
    "get_dashboard_service",
    "reset_dashboard_state",
]
