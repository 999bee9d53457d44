"""
Tests for caller resolution and user identifier mapping.
"""
import pytest
from flask import session

from core.identity import Caller, IdentityKind, IdentityNotAUserError, resolve_caller, user_identifier


@pytest.mark.identity
class TestUserIdentifier:

    def test_user(self):
        assert user_identifier(Caller(kind=IdentityKind.USER, id='12', org_id=1)) == 12

    def test_service_account(self):
        assert user_identifier(Caller(kind=IdentityKind.SERVICE_ACCOUNT, id='13', org_id=1)) == 13

    @pytest.mark.parametrize('kind', [IdentityKind.ANONYMOUS, IdentityKind.API_KEY, IdentityKind.RENDER])
    def test_other_kinds_are_rejected(self, kind):
        caller = Caller(kind=kind, id='5', org_id=1)
        with pytest.raises(IdentityNotAUserError) as exc:
            user_identifier(caller)
        assert exc.value.caller is caller

    def test_non_numeric_user_id_is_rejected(self):
        with pytest.raises(IdentityNotAUserError):
            user_identifier(Caller(kind=IdentityKind.USER, id='abc', org_id=1))


@pytest.mark.identity
class TestResolveCaller:

    def test_no_session(self, app):
        with app.test_request_context():
            assert resolve_caller() is None

    def test_user_session(self, app, user):
        with app.test_request_context():
            session['user_id'] = user.id
            caller = resolve_caller()

        assert caller.kind is IdentityKind.USER
        assert caller.id == str(user.id)
        assert caller.org_id == 1

    def test_session_org_overrides_user_org(self, app, user):
        with app.test_request_context():
            session['user_id'] = user.id
            session['org_id'] = 3
            caller = resolve_caller()

        assert caller.org_id == 3

    def test_service_account_session(self, app, service_account):
        with app.test_request_context():
            session['user_id'] = service_account.id
            caller = resolve_caller()

        assert caller.kind is IdentityKind.SERVICE_ACCOUNT

    def test_unknown_user(self, app):
        with app.test_request_context():
            session['user_id'] = 424242
            assert resolve_caller() is None

    def test_non_user_principal(self, app):
        with app.test_request_context():
            session['identity_type'] = 'render'
            session['identity_id'] = 'r-1'
            caller = resolve_caller()

        assert caller.kind is IdentityKind.RENDER
        assert caller.id == 'r-1'

    def test_unknown_principal_kind(self, app):
        with app.test_request_context():
            session['identity_type'] = 'carrier-pigeon'
            assert resolve_caller() is None

    def test_anonymous_when_enabled(self, app):
        app.config['ANONYMOUS_ENABLED'] = True
        app.config['ANONYMOUS_ORG_ID'] = 4
        try:
            with app.test_request_context():
                caller = resolve_caller()
        finally:
            app.config['ANONYMOUS_ORG_ID'] = 1

        assert caller == Caller.anonymous(4)
