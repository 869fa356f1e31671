"""
User Use Cases

Read models for the logged-in user.
"""

from .load_dashboard_use_case import DashboardResponse, LoadDashboardUseCase

__all__ = [
    "LoadDashboardUseCase",
    "DashboardResponse",
]
