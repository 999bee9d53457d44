"""
core.identity: request principal resolution.

Public API:
    Caller, IdentityKind: who issued the request
    resolve_caller: build a Caller from the Flask session
    user_identifier: map a Caller to a user id (users and service accounts only)
"""

from core.identity.caller import (
    Caller,
    IdentityKind,
    IdentityNotAUserError,
    resolve_caller,
    user_identifier,
)

__all__ = [
    'Caller', 'IdentityKind', 'IdentityNotAUserError',
    'resolve_caller', 'user_identifier',
]
