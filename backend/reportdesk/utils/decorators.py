from functools import wraps

from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import PermissionDenied
from reportdesk.domain.roles import Role


def active_user_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        actor = current_actor()
        if not actor.role.is_active:
            raise PermissionDenied("Your account is inactive. Ask an administrator for access.")

        return fn(*args, **kwargs)
    return wrapper

def roles_required(*allowed_roles: Role):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            actor = current_actor()

            if actor.role not in allowed_roles:
                raise PermissionDenied("Insufficient permissions")

            return fn(*args, **kwargs)
        return wrapper
    return decorator

admin_required = roles_required(Role.ADMIN, Role.SUPER_ADMIN)
