"""
Dashboard Module
"""
from .client import DashboardClient, DatasetFetchError
from .state import DashboardState, DashboardView, build_dashboard

__all__ = [
    "DashboardClient",
    "DatasetFetchError",
    "DashboardState",
    "DashboardView",
    "build_dashboard",
]
