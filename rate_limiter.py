"""
Rate limiting for the dashboard stars service.

Signed-in callers are limited per user so several users behind one proxy do
not share a bucket; everyone else is limited by remote address.
"""
from flask import session
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os


def star_rate_limit_key():
    """Bucket key: the session user when there is one, else the client address."""
    user_id = session.get('user_id')
    if user_id:
        return f'user:{user_id}'
    return f'addr:{get_remote_address()}'


def limiter_storage_uri():
    """RATELIMIT_STORAGE_URI wins, then REDIS_URL, then in-process memory."""
    return (
        os.environ.get('RATELIMIT_STORAGE_URI')
        or os.environ.get('REDIS_URL')
        or 'memory://'
    )


def default_limits():
    """Limits applied to every route (RATE_LIMIT_DEFAULT, semicolon separated)."""
    raw = os.environ.get('RATE_LIMIT_DEFAULT', '1000 per hour;100 per minute')
    return [part.strip() for part in raw.split(';') if part.strip()]


limiter = Limiter(
    key_func=star_rate_limit_key,
    storage_uri=limiter_storage_uri(),
    default_limits=default_limits(),
    headers_enabled=True,
)


def init_limiter(app):
    """Bind the limiter to the app; RATELIMIT_ENABLED=false switches it off."""
    limiter.init_app(app)
    if os.environ.get('RATELIMIT_ENABLED', 'true').strip().lower() in ('0', 'false', 'no', 'off'):
        limiter.enabled = False
    return limiter
