"""
Star routes: star, unstar and list a user's starred dashboards.

The numeric-id routes are kept for older clients and log a deprecation
warning on every call; new clients address dashboards by uid.
"""
import re
from datetime import datetime
from functools import wraps

from flask import current_app, g, jsonify

from core.dashboards.lookup import DashboardRef, DashboardService, GetDashboardQuery
from core.identity.caller import IdentityNotAUserError, resolve_caller, user_identifier
from core.observability.notifier import LoggingNotifier
from core.stars.commands import GetUserStarsQuery, StarDashboardCommand, UnstarDashboardCommand
from core.stars.service import StarService
from rate_limiter import limiter
from routes.api_errors import (
    InternalError, InvalidCallerError, InvalidInputError, NotFoundError,
)

_INT_RE = re.compile(r'[+-]?[0-9]+')

# Dashboard ids are signed 64-bit integers
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

NOT_A_USER_MESSAGE = 'Only users and service accounts can star dashboards'


class StarAPI:
    """Translates star requests into StarService calls.

    Collaborators are injected so the API can run against the database
    services or against test doubles.
    """

    def __init__(self, star_service, dashboard_service, notifier):
        self.star_service = star_service
        self.dashboard_service = dashboard_service
        self.notifier = notifier

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _user_id(caller):
        try:
            return user_identifier(caller)
        except IdentityNotAUserError as e:
            raise InvalidCallerError(NOT_A_USER_MESSAGE, cause=e)

    @staticmethod
    def _dashboard_id(raw):
        if raw is None or not _INT_RE.fullmatch(raw):
            raise InvalidInputError('Invalid dashboard ID')
        dashboard_id = int(raw)
        if not INT64_MIN <= dashboard_id <= INT64_MAX:
            raise InvalidInputError('Invalid dashboard ID')
        if dashboard_id <= 0:
            raise InvalidInputError('Missing dashboard id')
        return dashboard_id

    @staticmethod
    def _dashboard_uid(uid):
        if not uid:
            raise InvalidInputError('Invalid dashboard UID')
        return uid

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def get_stars(self, caller):
        """Return the uids the caller has starred."""
        user_id = self._user_id(caller)
        try:
            result = self.star_service.get_by_user(GetUserStarsQuery(user_id=user_id))
        except Exception as e:
            raise InternalError('Failed to get user stars', cause=e)
        return sorted(result.user_stars)

    def star_dashboard(self, caller, raw_id):
        """Star by legacy numeric id. The id is trusted, no lookup is made."""
        dashboard_id = self._dashboard_id(raw_id)
        user_id = self._user_id(caller)

        self.notifier.warn(
            'POST /api/user/stars/dashboard/{dashboard_id} is deprecated, '
            'please use POST /api/user/stars/dashboard/uid/{dashboard_uid} instead',
            user_id=user_id, dashboard_id=dashboard_id,
        )

        cmd = StarDashboardCommand(user_id=user_id, dashboard_id=dashboard_id, updated=datetime.utcnow())
        try:
            self.star_service.add(cmd)
        except Exception as e:
            raise InternalError('Failed to star dashboard', cause=e)
        return 'Dashboard starred!'

    def star_dashboard_by_uid(self, caller, uid):
        uid = self._dashboard_uid(uid)
        user_id = self._user_id(caller)

        query = GetDashboardQuery(ref=DashboardRef.by_uid(uid), org_id=caller.org_id)
        try:
            dashboard = self.dashboard_service.get_dashboard(query)
        except Exception as e:
            raise NotFoundError('Dashboard not found', cause=e)

        cmd = StarDashboardCommand(
            user_id=user_id,
            dashboard_id=dashboard.id,
            dashboard_uid=uid,
            org_id=caller.org_id,
            updated=datetime.utcnow(),
        )
        try:
            self.star_service.add(cmd)
        except Exception as e:
            raise InternalError('Failed to star dashboard', cause=e)
        return 'Dashboard starred!'

    def unstar_dashboard(self, caller, raw_id):
        """Unstar by legacy numeric id."""
        dashboard_id = self._dashboard_id(raw_id)
        user_id = self._user_id(caller)

        self.notifier.warn(
            'DELETE /api/user/stars/dashboard/{dashboard_id} is deprecated, '
            'please use DELETE /api/user/stars/dashboard/uid/{dashboard_uid} instead',
            user_id=user_id, dashboard_id=dashboard_id,
        )

        cmd = UnstarDashboardCommand(user_id=user_id, dashboard_id=dashboard_id)
        try:
            self.star_service.delete(cmd)
        except Exception as e:
            raise InternalError('Failed to unstar dashboard', cause=e)
        return 'Dashboard unstarred'

    def unstar_dashboard_by_uid(self, caller, uid):
        uid = self._dashboard_uid(uid)
        user_id = self._user_id(caller)

        cmd = UnstarDashboardCommand(user_id=user_id, dashboard_uid=uid, org_id=caller.org_id)
        try:
            self.star_service.delete(cmd)
        except Exception as e:
            raise InternalError('Failed to unstar dashboard', cause=e)
        return 'Dashboard unstarred'


def require_caller(f):
    """Decorator to require an identity; stores it on flask.g.caller."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        caller = resolve_caller()
        if caller is None:
            return jsonify({'status': 401, 'message': 'Authentication required'}), 401
        g.caller = caller
        return f(*args, **kwargs)
    return decorated_function


def _mutation_rate_limit():
    return current_app.config.get('STAR_MUTATION_RATE_LIMIT', '60 per minute')


def default_star_api():
    dashboards = DashboardService()
    return StarAPI(
        star_service=StarService(dashboards),
        dashboard_service=dashboards,
        notifier=LoggingNotifier('stars.api'),
    )


def register_star_routes(app, star_api=None):
    """Register star routes with the Flask app."""
    api = star_api or default_star_api()
    app.extensions['star_api'] = api

    def current_api():
        return current_app.extensions['star_api']

    @app.route('/api/user/stars', methods=['GET'])
    @require_caller
    def get_user_stars():
        return jsonify(current_api().get_stars(g.caller))

    @app.route('/api/user/stars/dashboard/<dashboard_id>', methods=['POST'])
    @limiter.limit(_mutation_rate_limit)
    @require_caller
    def star_dashboard(dashboard_id):
        message = current_api().star_dashboard(g.caller, dashboard_id)
        return jsonify({'message': message})

    @app.route('/api/user/stars/dashboard/uid/', defaults={'dashboard_uid': ''}, methods=['POST'])
    @app.route('/api/user/stars/dashboard/uid/<dashboard_uid>', methods=['POST'])
    @limiter.limit(_mutation_rate_limit)
    @require_caller
    def star_dashboard_by_uid(dashboard_uid):
        message = current_api().star_dashboard_by_uid(g.caller, dashboard_uid)
        return jsonify({'message': message})

    @app.route('/api/user/stars/dashboard/<dashboard_id>', methods=['DELETE'])
    @limiter.limit(_mutation_rate_limit)
    @require_caller
    def unstar_dashboard(dashboard_id):
        message = current_api().unstar_dashboard(g.caller, dashboard_id)
        return jsonify({'message': message})

    @app.route('/api/user/stars/dashboard/uid/', defaults={'dashboard_uid': ''}, methods=['DELETE'])
    @app.route('/api/user/stars/dashboard/uid/<dashboard_uid>', methods=['DELETE'])
    @limiter.limit(_mutation_rate_limit)
    @require_caller
    def unstar_dashboard_by_uid(dashboard_uid):
        message = current_api().unstar_dashboard_by_uid(g.caller, dashboard_uid)
        return jsonify({'message': message})

    return api
