"""
Single-user authentication for ClientVault.
"""

import logging
from typing import Optional

from .crypto import hash_password, verify_password
from .models import User
from .repositories import UserRepository
from .utils import new_id, now_iso

logger = logging.getLogger(__name__)


class AuthManager:
    """
    Handles registration and login for the one local account.

    Only one User may exist; register() refuses to create a second one. The
    UserRepository itself will overwrite freely, so this is the only place the
    rule is enforced.
    """

    def __init__(self, users: UserRepository):
        self.users = users
        self._current_user: Optional[User] = None

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    def is_authenticated(self) -> bool:
        return self._current_user is not None

    def has_user(self) -> bool:
        return self.users.get() is not None

    def register(self, username: str, password: str) -> bool:
        """
        Create the account and log in as it.
        Returns:
            True if registered, False if an account already exists or input is empty
        """
        if not username or not password:
            logger.warning("Registration failed: username and password are required")
            return False

        if self.users.get() is not None:
            logger.warning("Registration failed: a user account already exists")
            return False

        user = User(
            id=new_id(),
            username=username,
            password_hash=hash_password(password),
            created_at=now_iso()
        )
        self.users.save(user)
        self._current_user = user
        logger.info("User registered successfully")
        return True

    def login(self, username: str, password: str) -> bool:
        stored_user = self.users.get()
        if stored_user is None:
            logger.warning("Login failed: no user account found")
            return False

        if stored_user.username == username and verify_password(stored_user.password_hash, password):
            self._current_user = stored_user
            logger.info("User authenticated successfully")
            return True

        logger.info("Authentication failed: credentials don't match")
        return False

    def logout(self) -> None:
        self._current_user = None
        logger.info("User logged out")

    def refresh(self) -> Optional[User]:
        """
        Re-derive the session from the persisted account, on start-up and
        whenever the application is brought back to the foreground.
        A stored account restores the session; without one the session ends.
        """
        saved_user = self.users.get()
        if saved_user is not None:
            logger.debug("User authentication restored from storage")
        elif self._current_user is not None:
            logger.info("No user found in storage, ending session")
        self._current_user = saved_user
        return self._current_user
