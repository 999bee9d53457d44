"""
core.dashboards: dashboard lookup by id or uid.
"""

from core.dashboards.lookup import (
    DashboardNotFoundError,
    DashboardRef,
    DashboardService,
    GetDashboardQuery,
)

__all__ = [
    'DashboardNotFoundError', 'DashboardRef', 'DashboardService', 'GetDashboardQuery',
]
