from typing import Any, Dict, Optional

from reportdesk.domain.exceptions import AuthenticationRequired, ValidationError
from reportdesk.domain.roles import Role
from reportdesk.extensions import db
from reportdesk.models.user import Profile, UserRole
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional

MIN_PASSWORD_LENGTH = 6


def _credentials(data: Dict[str, Any]):
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""

    if not email or not password:
        raise ValidationError("Email and password required")
    if "@" not in email:
        raise ValidationError("Invalid email address")
    return email, password


def register_profile(*, data: Dict[str, Any], role: Optional[Role] = None) -> Profile:
    """
    Create a login. Without ``role`` the account is inactive until an
    administrator grants one.
    """
    email, password = _credentials(data)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if Profile.query.filter_by(email=email).first():
        raise ValidationError("An account with this email already exists")

    profile = Profile()
    profile.email = email
    profile.full_name = (data.get("full_name") or data.get("fullName") or "").strip() or None
    profile.set_password(password)

    with transactional():
        db.session.add(profile)
        db.session.flush()

        if role is not None and role is not Role.INACTIVE:
            user_role = UserRole()
            user_role.user_id = profile.id
            user_role.role = role.value
            db.session.add(user_role)

        log_action(
            action="user.create",
            entity_type="profile",
            entity_id=profile.id,
            payload={"email": email, "role": (role or Role.INACTIVE).value},
        )

    return profile


def authenticate(*, data: Dict[str, Any]) -> Profile:
    email, password = _credentials(data)

    profile = Profile.query.filter_by(email=email).first()
    if not profile or not profile.check_password(password):
        raise AuthenticationRequired("Invalid credentials")

    return profile
