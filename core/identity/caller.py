"""
Request principal resolution.

A Caller is whoever issued the current request. Only two kinds can own
stars: real users and service accounts. Everything else (anonymous viewers,
API keys, render sessions) is a caller but not a user.

The session is populated by the auth layer:
    user_id: signed-in user or service account
    org_id: active org (optional, falls back to the user's org)
    identity_type: non-user principal kind, with identity_id
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from flask import current_app, session

from models import db, User


class IdentityKind(str, Enum):
    USER = 'user'
    SERVICE_ACCOUNT = 'service-account'
    ANONYMOUS = 'anonymous'
    API_KEY = 'api-key'
    RENDER = 'render'


class IdentityNotAUserError(Exception):
    """Raised when a caller cannot be mapped to a user identifier."""

    def __init__(self, caller: Caller):
        self.caller = caller
        super().__init__(f'identity of kind {caller.kind.value!r} is not a user')


@dataclass(frozen=True)
class Caller:
    kind: IdentityKind
    id: str
    org_id: int

    @classmethod
    def for_user(cls, user: User, org_id: int | None = None) -> Caller:
        kind = IdentityKind.SERVICE_ACCOUNT if user.is_service_account else IdentityKind.USER
        return cls(kind=kind, id=str(user.id), org_id=org_id or user.org_id)

    @classmethod
    def anonymous(cls, org_id: int) -> Caller:
        return cls(kind=IdentityKind.ANONYMOUS, id='', org_id=org_id)


def user_identifier(caller: Caller) -> int:
    """Return the numeric user id behind a caller.

    Raises:
        IdentityNotAUserError: for any kind other than user or service account,
            or when the id is not numeric.
    """
    if caller.kind in (IdentityKind.USER, IdentityKind.SERVICE_ACCOUNT):
        try:
            return int(caller.id)
        except (TypeError, ValueError):
            raise IdentityNotAUserError(caller)
    raise IdentityNotAUserError(caller)


def resolve_caller() -> Caller | None:
    """Build the Caller for the current request, or None if unauthenticated."""
    user_id = session.get('user_id')
    if user_id:
        user = db.session.get(User, user_id)
        if user is None:
            return None
        return Caller.for_user(user, session.get('org_id'))

    identity_type = session.get('identity_type')
    if identity_type:
        try:
            kind = IdentityKind(identity_type)
        except ValueError:
            return None
        org_id = session.get('org_id') or current_app.config.get('ANONYMOUS_ORG_ID', 1)
        return Caller(kind=kind, id=str(session.get('identity_id', '')), org_id=org_id)

    if current_app.config.get('ANONYMOUS_ENABLED'):
        return Caller.anonymous(current_app.config.get('ANONYMOUS_ORG_ID', 1))

    return None
