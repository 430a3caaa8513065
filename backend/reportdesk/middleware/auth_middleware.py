from flask import current_app, g
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from reportdesk.auth_context import AuthContext
from reportdesk.extensions import db
from reportdesk.models.user import Profile, load_role


def _log_auth_event(event, session):
    if session is None:
        current_app.logger.debug("auth %s", event)
    else:
        current_app.logger.debug("auth %s user=%s role=%s", event, session.user_id, session.role.value)


def auth_middleware(app):
    @app.before_request
    def load_auth_context():
        auth = AuthContext(role_loader=load_role)
        auth.subscribe(_log_auth_event)
        g.auth = auth

        # Invalid or expired tokens are answered by the JWT error handlers
        if not verify_jwt_in_request(optional=True):
            return None

        user_id = get_jwt_identity()
        profile = db.session.get(Profile, user_id) if user_id else None
        if profile:
            auth.sign_in(profile.id, profile.email)
