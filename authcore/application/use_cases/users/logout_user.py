"""Use-case for ending the current session."""

from __future__ import annotations

from authcore.domain.users.exceptions import SessionDestroyError
from authcore.domain.users.repositories import SessionStore
from authcore.shared.logging import logger


class LogoutUserUseCase:
    def execute(self, session: SessionStore) -> bool:
        """Destroy the session; the cookie is cleared whatever the outcome."""
        try:
            session.destroy()
        except SessionDestroyError:
            logger.exception("auth.logout: session destroy failed")
            return False
        finally:
            session.clear_cookie()
        return True
