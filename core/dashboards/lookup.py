"""
Dashboard lookup by legacy numeric id or by uid.

Dashboards are always looked up inside an org. A DashboardRef carries one of
the two addressing modes so callers do not have to juggle id/uid pairs.
"""
from __future__ import annotations

from dataclasses import dataclass

from models import db, Dashboard


class DashboardNotFoundError(Exception):
    """No dashboard matches the reference in the given org."""

    def __init__(self, ref: DashboardRef, org_id: int):
        self.ref = ref
        self.org_id = org_id
        super().__init__(f'dashboard {ref} not found in org {org_id}')


@dataclass(frozen=True)
class DashboardRef:
    """Either a legacy numeric id or a uid, never both."""
    id: int | None = None
    uid: str | None = None

    def __post_init__(self):
        if (self.id is None) == (self.uid is None):
            raise ValueError('DashboardRef needs exactly one of id or uid')

    @classmethod
    def by_id(cls, dashboard_id: int) -> DashboardRef:
        return cls(id=dashboard_id)

    @classmethod
    def by_uid(cls, uid: str) -> DashboardRef:
        return cls(uid=uid)

    @property
    def is_uid(self) -> bool:
        return self.uid is not None

    def __str__(self):
        return f'uid={self.uid}' if self.is_uid else f'id={self.id}'


@dataclass(frozen=True)
class GetDashboardQuery:
    ref: DashboardRef
    org_id: int


class DashboardService:
    """SQLAlchemy-backed dashboard lookup."""

    def get_dashboard(self, query: GetDashboardQuery) -> Dashboard:
        q = Dashboard.query.filter_by(org_id=query.org_id)
        if query.ref.is_uid:
            q = q.filter_by(uid=query.ref.uid)
        else:
            q = q.filter_by(id=query.ref.id)

        dashboard = q.first()
        if dashboard is None:
            raise DashboardNotFoundError(query.ref, query.org_id)
        return dashboard

    def get_dashboard_uid_by_id(self, dashboard_id: int) -> tuple[str, int] | None:
        """Return (uid, org_id) for a legacy id, or None if unknown."""
        dashboard = db.session.get(Dashboard, dashboard_id)
        if dashboard is None:
            return None
        return dashboard.uid, dashboard.org_id
