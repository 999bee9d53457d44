"""
Pytest configuration and shared fixtures for dashboard stars tests
"""
import pytest
import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment before importing app
os.environ['FLASK_ENV'] = 'testing'
os.environ['TESTING'] = 'true'


@pytest.fixture(scope='session')
def app():
    """Create and configure a test Flask application instance"""
    # The engine is bound when the server module initialises the db,
    # so the database URL must be in place before the import.
    db_fd, db_path = tempfile.mkstemp(suffix='.db')
    os.environ['DATABASE_URL'] = f'sqlite:///{db_path}'

    from server import app as flask_app
    from models import db
    from rate_limiter import limiter

    flask_app.config.update({
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'ANONYMOUS_ENABLED': False,
        'ANONYMOUS_ORG_ID': 1,
        'STARS_EXPOSE_ERROR_DETAILS': False,
    })

    # Disable rate limiting for tests (must be done after init_limiter ran)
    limiter.enabled = False

    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()

    os.close(db_fd)
    os.unlink(db_path)


@pytest.fixture(autouse=True)
def _clean_db(app):
    """Clean up data and config toggles between tests."""
    from models import db
    star_api = app.extensions['star_api']
    notifier = star_api.notifier
    yield
    app.extensions['star_api'] = star_api
    star_api.notifier = notifier
    app.config['ANONYMOUS_ENABLED'] = False
    app.config['STARS_EXPOSE_ERROR_DETAILS'] = False
    db.session.rollback()
    for table in reversed(db.metadata.sorted_tables):
        db.session.execute(table.delete())
    db.session.commit()
    db.session.expunge_all()


@pytest.fixture(scope='function')
def client(app):
    """Create a test client for the Flask application"""
    return app.test_client()


@pytest.fixture
def user(app):
    """Create a test user in org 1"""
    from models import User, db

    user = User(
        email='test@example.com',
        login='test',
        org_id=1,
        created_at=datetime.utcnow(),
    )
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def service_account(app):
    """Create a service account in org 1"""
    from models import User, db

    sa = User(
        email='sa-reporting@example.com',
        login='sa-reporting',
        org_id=1,
        is_service_account=True,
        created_at=datetime.utcnow(),
    )
    db.session.add(sa)
    db.session.commit()
    return sa


@pytest.fixture
def dashboard(app):
    """Create a dashboard with uid abc123 in org 1"""
    from models import Dashboard, db

    dash = Dashboard(uid='abc123', org_id=1, title='Service overview')
    db.session.add(dash)
    db.session.commit()
    return dash


@pytest.fixture
def other_org_dashboard(app):
    """Create a dashboard that lives in org 2"""
    from models import Dashboard, db

    dash = Dashboard(uid='xyz789', org_id=2, title='Billing')
    db.session.add(dash)
    db.session.commit()
    return dash


@pytest.fixture
def authenticated_client(client, user, app):
    """Create a test client with an authenticated session"""
    with client.session_transaction() as sess:
        sess['user_id'] = user.id
    return client


class RecordingNotifier:
    """Deprecation sink that keeps every warning in memory."""

    def __init__(self):
        self.warnings = []

    def warn(self, message, **fields):
        self.warnings.append((message, fields))


@pytest.fixture
def notifier():
    return RecordingNotifier()


class FakeStarService:
    """In-memory star service that records every call."""

    def __init__(self, fail=False):
        self.fail = fail
        self.stars = {}
        self.calls = []

    def get_by_user(self, query):
        self.calls.append(('get_by_user', query))
        if self.fail:
            raise RuntimeError('database is locked')
        return SimpleNamespace(user_stars=set(self.stars.get(query.user_id, set())))

    def add(self, cmd):
        self.calls.append(('add', cmd))
        if self.fail:
            raise RuntimeError('database is locked')
        if cmd.dashboard_uid:
            self.stars.setdefault(cmd.user_id, set()).add(cmd.dashboard_uid)

    def delete(self, cmd):
        self.calls.append(('delete', cmd))
        if self.fail:
            raise RuntimeError('database is locked')
        if cmd.dashboard_uid:
            self.stars.get(cmd.user_id, set()).discard(cmd.dashboard_uid)


class FakeDashboardService:
    """Dashboard lookup over a fixed {(org_id, uid): id} map."""

    def __init__(self, dashboards=None):
        self.dashboards = dashboards or {}
        self.calls = []

    def get_dashboard(self, query):
        from core.dashboards.lookup import DashboardNotFoundError

        self.calls.append(query)
        key = (query.org_id, query.ref.uid)
        if key not in self.dashboards:
            raise DashboardNotFoundError(query.ref, query.org_id)
        return SimpleNamespace(id=self.dashboards[key], uid=query.ref.uid, org_id=query.org_id)


@pytest.fixture
def fake_star_service():
    return FakeStarService()


@pytest.fixture
def failing_star_service():
    return FakeStarService(fail=True)


@pytest.fixture
def fake_dashboard_service():
    return FakeDashboardService({(1, 'abc123'): 42})


@pytest.fixture
def fake_star_api(fake_star_service, fake_dashboard_service, notifier):
    from routes.star_routes import StarAPI
    return StarAPI(fake_star_service, fake_dashboard_service, notifier)
