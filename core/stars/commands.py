"""
Commands and queries accepted by the star service.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


class StarCommandValidationError(ValueError):
    """A star command is missing its user or its dashboard reference."""


def _validate_target(user_id: int, dashboard_id: int | None, dashboard_uid: str | None) -> None:
    if not user_id or user_id <= 0:
        raise StarCommandValidationError('user_id is required')
    if not dashboard_uid and not (dashboard_id and dashboard_id > 0):
        raise StarCommandValidationError('dashboard_id or dashboard_uid is required')


@dataclass
class StarDashboardCommand:
    user_id: int
    dashboard_id: int | None = None
    dashboard_uid: str | None = None
    org_id: int | None = None
    updated: datetime = field(default_factory=datetime.utcnow)

    def validate(self) -> None:
        _validate_target(self.user_id, self.dashboard_id, self.dashboard_uid)


@dataclass
class UnstarDashboardCommand:
    user_id: int
    dashboard_id: int | None = None
    dashboard_uid: str | None = None
    org_id: int | None = None

    def validate(self) -> None:
        _validate_target(self.user_id, self.dashboard_id, self.dashboard_uid)


@dataclass(frozen=True)
class GetUserStarsQuery:
    user_id: int


@dataclass(frozen=True)
class IsStarredByUserQuery:
    user_id: int
    dashboard_uid: str
    org_id: int


@dataclass
class UserStars:
    """Dashboard uids starred by one user."""
    user_stars: set[str] = field(default_factory=set)
