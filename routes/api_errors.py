"""
API error types and their JSON rendering.

Every error body has the shape {"status": <code>, "message": <text>}. The
underlying cause is logged and only echoed back as "error" when
STARS_EXPOSE_ERROR_DETAILS is on.
"""
import logging

from flask import current_app, jsonify

logger = logging.getLogger('stars.api')


class ApiError(Exception):
    status = 500

    def __init__(self, message, cause=None, status=None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if status is not None:
            self.status = status


class InvalidInputError(ApiError):
    status = 400


class InvalidCallerError(ApiError):
    status = 400


class NotFoundError(ApiError):
    status = 404


class InternalError(ApiError):
    status = 500


def handle_api_error(err):
    if err.status >= 500:
        logger.error('%s: %s', err.message, err.cause, exc_info=err.cause)
    elif err.cause is not None:
        logger.info('%s: %s', err.message, err.cause)

    body = {'status': err.status, 'message': err.message}
    if err.cause is not None and current_app.config.get('STARS_EXPOSE_ERROR_DETAILS'):
        body['error'] = str(err.cause)
    return jsonify(body), err.status


def register_error_handlers(app):
    """Render ApiError subclasses raised anywhere in a request as JSON."""
    app.register_error_handler(ApiError, handle_api_error)
