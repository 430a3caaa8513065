from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import NotFoundError, PermissionDenied, ValidationError
from reportdesk.domain.roles import Role, can_manage_role
from reportdesk.extensions import db
from reportdesk.models.user import Profile, UserRole, load_role
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional


def list_users():
    """Every profile with its current role, newest first."""
    profiles = Profile.query.order_by(Profile.created_at.desc()).all()
    roles = {row.user_id: Role.from_value(row.role) for row in UserRole.query.all()}
    return [(profile, roles.get(profile.id, Role.INACTIVE)) for profile in profiles]


def set_user_role(*, user_id: str, role) -> Role:
    """
    Grant, change or revoke a role. ``inactive`` removes the role row.

    Admins may only move users between staff and inactive; super admins may
    change anyone. Nobody changes their own role.
    """
    actor = current_actor()

    new_role = Role.from_value(role)
    if role != new_role.value:
        raise ValidationError(f"Unknown role: {role}")

    if db.session.get(Profile, user_id) is None:
        raise NotFoundError("User not found")
    if user_id == actor.user_id:
        raise PermissionDenied("You cannot change your own role")

    current_role = load_role(user_id)
    if not (can_manage_role(actor.role, current_role) and can_manage_role(actor.role, new_role)):
        raise PermissionDenied("You do not have permission to change this role")

    if current_role is new_role:
        return new_role

    row = UserRole.query.filter_by(user_id=user_id).first()

    with transactional():
        if new_role is Role.INACTIVE:
            if row is not None:
                db.session.delete(row)
        elif row is None:
            row = UserRole()
            row.user_id = user_id
            row.role = new_role.value
            db.session.add(row)
        else:
            row.role = new_role.value

        log_action(
            action="user.role_change",
            entity_type="profile",
            entity_id=user_id,
            payload={"from": current_role.value, "to": new_role.value},
        )

    return new_role
