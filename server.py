#!/usr/bin/env python3
"""
Dashboard Stars Server
A small Flask service that lets users star dashboards and list their stars
"""

from flask import Flask, jsonify
from flask_cors import CORS
import logging
import os
from pathlib import Path
import secrets

from logging_config import setup_logging

setup_logging()
logger = logging.getLogger('stars')

BASE_DIR = Path(__file__).parent


def _env_flag(name, default='false'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


app = Flask(__name__)
CORS(app, supports_credentials=True)

# Secret key for sessions (generate a secure one for production)
app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', secrets.token_hex(32))

# Database configuration
database_url = os.environ.get('DATABASE_URL', f'sqlite:///{BASE_DIR}/stars.db')

# Fix Heroku's postgres:// scheme (should be postgresql://)
if database_url and database_url.startswith('postgres://'):
    database_url = database_url.replace('postgres://', 'postgresql://', 1)

# Managed PostgreSQL providers require SSL
if database_url and database_url.startswith('postgresql://'):
    if '?' not in database_url:
        database_url += '?sslmode=require'
    elif 'sslmode' not in database_url:
        database_url += '&sslmode=require'

app.config['SQLALCHEMY_DATABASE_URI'] = database_url
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

# PostgreSQL-specific connection pool settings
if database_url and database_url.startswith('postgresql://'):
    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {
        'pool_size': 5,
        'max_overflow': 10,
        'pool_recycle': 300,  # Recycle connections after 5 minutes
        'pool_pre_ping': True,
        'pool_timeout': 30,
        'connect_args': {
            'connect_timeout': 10,
        }
    }
else:
    # SQLite settings (for local dev)
    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {
        'pool_pre_ping': True
    }

# Identity and API behaviour
app.config['ANONYMOUS_ENABLED'] = _env_flag('ANONYMOUS_ENABLED')
app.config['ANONYMOUS_ORG_ID'] = int(os.environ.get('ANONYMOUS_ORG_ID', '1'))
app.config['STAR_MUTATION_RATE_LIMIT'] = os.environ.get('STAR_MUTATION_RATE_LIMIT', '60 per minute')
app.config['STARS_EXPOSE_ERROR_DETAILS'] = _env_flag('STARS_EXPOSE_ERROR_DETAILS')

# Import and initialize database
from models import db  # noqa: E402
db.init_app(app)

# Initialize rate limiter
from rate_limiter import init_limiter  # noqa: E402
limiter = init_limiter(app)

# JSON error bodies for API errors
from routes.api_errors import register_error_handlers  # noqa: E402
register_error_handlers(app)

# Register star routes
from routes.star_routes import register_star_routes  # noqa: E402
register_star_routes(app)


@app.route('/api/health', methods=['GET'])
@limiter.exempt
def health():
    return jsonify({'status': 'ok'})


if __name__ == '__main__':
    logger.info("Dashboard Stars Server starting on http://localhost:5000")
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', '5000')), debug=_env_flag('FLASK_DEBUG'))
