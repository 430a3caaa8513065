from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from reportdesk.domain.exceptions import DomainError
from reportdesk.extensions import db, jwt


def _error_response(name, message, status_code, details=None):
    body = {"error": name, "message": message}
    if details:
        body["details"] = details

    response = jsonify(body)
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(DomainError)
    def handle_domain_error(error):
        if error.status_code >= 500:
            current_app.logger.error("%s: %s", type(error).__name__, error.message)
        return _error_response(
            type(error).__name__, error.message, error.status_code, error.details
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return _error_response(type(error).__name__, error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        db.session.rollback()
        current_app.logger.exception("Unhandled error")
        return _error_response("InternalServerError", "Something went wrong. Please try again.", 500)

    # -------------------------------------------------
    # JWT failures use the same envelope
    # -------------------------------------------------
    @jwt.unauthorized_loader
    def missing_token(reason):
        return _error_response("AuthenticationRequired", "Authentication required", 401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _error_response("AuthenticationRequired", "Invalid token", 401)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return _error_response("AuthenticationRequired", "Session expired. Please sign in again.", 401)
