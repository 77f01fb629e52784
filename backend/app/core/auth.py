"""Authentication context.

Holds the identity of whoever is making a request and lets interested
parties subscribe to identity changes. Services never read it: routes
resolve a user id from it and pass that id explicitly.
"""

import logging
from typing import Callable, Optional

from app.core.errors import AuthError

logger = logging.getLogger(__name__)

AuthListener = Callable[[Optional[str]], None]


class AuthContext:
    """Current user plus change listeners."""

    def __init__(self, user_id: Optional[str] = None):
        self._user_id = user_id or None
        self._listeners: list[AuthListener] = []

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def is_authenticated(self) -> bool:
        return self._user_id is not None

    def require_user(self) -> str:
        """Return the current user id.

        Raises:
            AuthError: If nobody is signed in
        """
        if self._user_id is None:
            raise AuthError("Authentication failed. Please log in.")
        return self._user_id

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener called with the new user id on every change.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_user(self, user_id: Optional[str]) -> None:
        """Sign a user in (or out with None) and notify listeners."""
        user_id = user_id or None
        if user_id == self._user_id:
            return
        self._user_id = user_id
        logger.debug("Auth state changed: %s", "signed in" if user_id else "signed out")
        for listener in list(self._listeners):
            listener(user_id)
