"""
Star storage.

Stars are keyed by (user, dashboard uid, org). Stars created through the
legacy numeric routes may only know the dashboard id; the service fills in
uid and org from the dashboards table when the id resolves, and otherwise
stores the id alone. Such uid-less stars are not listed by get_by_user.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from models import db, Star
from core.dashboards.lookup import DashboardService
from core.stars.commands import (
    GetUserStarsQuery,
    IsStarredByUserQuery,
    StarDashboardCommand,
    UnstarDashboardCommand,
    UserStars,
)

logger = logging.getLogger('stars.service')


class StarStoreError(Exception):
    """The star table could not be read or written."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f'{operation} failed: {cause}')


class StarService:

    def __init__(self, dashboards: DashboardService | None = None):
        self.dashboards = dashboards or DashboardService()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_user(self, query: GetUserStarsQuery) -> UserStars:
        try:
            rows = db.session.query(Star.dashboard_uid).filter(
                Star.user_id == query.user_id,
                Star.dashboard_uid.isnot(None),
            ).all()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StarStoreError('get_by_user', e) from e
        except Exception:
            db.session.rollback()
            raise
        return UserStars(user_stars={uid for (uid,) in rows if uid})

    def is_starred_by_user(self, query: IsStarredByUserQuery) -> bool:
        try:
            star = Star.query.filter_by(
                user_id=query.user_id,
                dashboard_uid=query.dashboard_uid,
                org_id=query.org_id,
            ).first()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StarStoreError('is_starred_by_user', e) from e
        except Exception:
            db.session.rollback()
            raise
        return star is not None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add(self, cmd: StarDashboardCommand) -> Star:
        """Star a dashboard. Starring an already starred dashboard refreshes it."""
        cmd.validate()

        dashboard_uid, org_id = cmd.dashboard_uid, cmd.org_id
        try:
            if not dashboard_uid:
                resolved = self.dashboards.get_dashboard_uid_by_id(cmd.dashboard_id)
                if resolved is not None:
                    dashboard_uid, org_id = resolved

            star = self._find(cmd.user_id, cmd.dashboard_id, dashboard_uid, org_id)
            if star is None:
                star = Star(user_id=cmd.user_id)
                db.session.add(star)

            if cmd.dashboard_id:
                star.dashboard_id = cmd.dashboard_id
            if dashboard_uid:
                star.dashboard_uid = dashboard_uid
                star.org_id = org_id
            star.updated = cmd.updated

            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StarStoreError('add', e) from e
        except Exception:
            db.session.rollback()
            raise

        logger.debug('user %s starred dashboard %s', cmd.user_id, dashboard_uid or cmd.dashboard_id)
        return star

    def delete(self, cmd: UnstarDashboardCommand) -> int:
        """Remove a star. Returns the number of rows removed (0 is not an error)."""
        cmd.validate()

        query = Star.query.filter_by(user_id=cmd.user_id)
        if cmd.dashboard_uid:
            query = query.filter_by(dashboard_uid=cmd.dashboard_uid, org_id=cmd.org_id)
        else:
            query = query.filter_by(dashboard_id=cmd.dashboard_id)

        try:
            removed = query.delete(synchronize_session=False)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StarStoreError('delete', e) from e
        except Exception:
            db.session.rollback()
            raise

        logger.debug('user %s unstarred dashboard %s (%d rows)',
                     cmd.user_id, cmd.dashboard_uid or cmd.dashboard_id, removed)
        return removed

    def delete_by_user(self, user_id: int) -> int:
        """Remove every star owned by a user."""
        try:
            removed = Star.query.filter_by(user_id=user_id).delete(synchronize_session=False)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StarStoreError('delete_by_user', e) from e
        except Exception:
            db.session.rollback()
            raise

        logger.info('removed %d stars for user %s', removed, user_id)
        return removed

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _find(self, user_id, dashboard_id, dashboard_uid, org_id):
        if dashboard_uid:
            star = Star.query.filter_by(
                user_id=user_id, dashboard_uid=dashboard_uid, org_id=org_id,
            ).first()
            if star is not None:
                return star
        if dashboard_id:
            return Star.query.filter_by(user_id=user_id, dashboard_id=dashboard_id).first()
        return None
