from werkzeug.security import generate_password_hash, check_password_hash
from reportdesk.extensions import db
from reportdesk.domain.roles import Role
from .base import BaseModel


class Profile(BaseModel):
    __tablename__ = "profiles"

    email = db.Column(db.String(120), unique=True, nullable=False)
    full_name = db.Column(db.String(255), nullable=True)
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)


class UserRole(BaseModel):
    """One row per active user; no row means the user is inactive."""
    __tablename__ = "user_roles"

    user_id = db.Column(db.String(36), db.ForeignKey("profiles.id", ondelete="CASCADE"), unique=True, nullable=False)
    role = db.Column(db.String(20), nullable=False)


def load_role(user_id) -> Role:
    if not user_id:
        return Role.INACTIVE

    row = UserRole.query.filter_by(user_id=user_id).first()
    return Role.from_value(row.role if row else None)
