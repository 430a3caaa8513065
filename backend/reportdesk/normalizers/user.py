from ._dates import iso


def normalize_user(profile, role):
    return {
        "id": profile.id,
        "email": profile.email,
        "full_name": profile.full_name,
        "role": role.value,
        "is_active": role.is_active,
        "created_at": iso(profile.created_at),
    }


def normalize_session(session):
    if session is None:
        return {"authenticated": False, "user": None}

    return {
        "authenticated": True,
        "user": {
            "id": session.user_id,
            "email": session.email,
            "role": session.role.value,
            "is_admin": session.is_admin,
            "is_active": session.role.is_active,
        },
    }
