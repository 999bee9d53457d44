"""
core.stars: per-user dashboard stars.

Public API:
    StarService: add, delete, get_by_user, is_starred_by_user, delete_by_user
    StarDashboardCommand, UnstarDashboardCommand,
    GetUserStarsQuery, IsStarredByUserQuery, UserStars
    StarCommandValidationError, StarStoreError
"""

from core.stars.commands import (
    GetUserStarsQuery,
    IsStarredByUserQuery,
    StarCommandValidationError,
    StarDashboardCommand,
    UnstarDashboardCommand,
    UserStars,
)
from core.stars.service import StarService, StarStoreError

__all__ = [
    'StarService', 'StarStoreError',
    'StarDashboardCommand', 'UnstarDashboardCommand',
    'GetUserStarsQuery', 'IsStarredByUserQuery', 'UserStars',
    'StarCommandValidationError',
]
