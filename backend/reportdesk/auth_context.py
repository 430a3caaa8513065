"""
Request-scoped authentication context.

Holds the current session (user + role) and notifies subscribers when it
changes. The role is read from ``user_roles`` again on every
``refresh()`` because an admin can change it while a request is running.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from flask import g

from reportdesk.domain.exceptions import AuthenticationRequired
from reportdesk.domain.roles import Role

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
ROLE_CHANGED = "ROLE_CHANGED"


@dataclass(frozen=True)
class Session:
    user_id: str
    email: Optional[str]
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role.is_admin


Listener = Callable[[str, Optional[Session]], None]


class AuthContext:
    def __init__(self, role_loader: Callable[[str], Role]):
        self._role_loader = role_loader
        self._session: Optional[Session] = None
        self._listeners: List[Listener] = []

    def snapshot(self) -> Optional[Session]:
        return self._session

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, user_id: str, email: Optional[str] = None) -> Session:
        self._session = Session(user_id=user_id, email=email, role=self._role_loader(user_id))
        self._notify(SIGNED_IN)
        return self._session

    def sign_out(self) -> None:
        if self._session is None:
            return
        self._session = None
        self._notify(SIGNED_OUT)

    def refresh(self) -> Optional[Session]:
        if self._session is None:
            return None

        role = self._role_loader(self._session.user_id)
        if role is not self._session.role:
            self._session = replace(self._session, role=role)
            self._notify(ROLE_CHANGED)
        return self._session

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event, self._session)


def current_actor() -> Session:
    """The signed-in user with a freshly loaded role."""
    auth: Optional[AuthContext] = getattr(g, "auth", None)
    session = auth.refresh() if auth else None
    if session is None:
        raise AuthenticationRequired("Authentication required")
    return session
