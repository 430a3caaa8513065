from enum import Enum


class Role(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    STAFF = "staff"
    # No user_roles row. The account exists but may not do anything.
    INACTIVE = "inactive"

    @classmethod
    def from_value(cls, value) -> "Role":
        if isinstance(value, Role):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.INACTIVE

    @property
    def is_admin(self) -> bool:
        return self in (Role.ADMIN, Role.SUPER_ADMIN)

    @property
    def is_active(self) -> bool:
        return self is not Role.INACTIVE


ASSIGNABLE_ROLES = {Role.SUPER_ADMIN, Role.ADMIN, Role.STAFF}


def can_manage_role(actor_role: Role, target_role: Role) -> bool:
    """
    Super admins manage everyone; admins only manage staff and inactive users.
    """
    if actor_role is Role.SUPER_ADMIN:
        return True
    if actor_role is Role.ADMIN:
        return target_role in (Role.STAFF, Role.INACTIVE)
    return False
