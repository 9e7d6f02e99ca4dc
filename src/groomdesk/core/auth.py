"""Session issuance through the hosted backend's auth service."""

from collections.abc import Callable
from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel, Field, field_validator
from supabase import AuthError

INVALID_CREDENTIALS = "Invalid login credentials"
INVALID_CREDENTIALS_MESSAGE = "Email ou senha incorretos."
SIGN_UP_MESSAGE = "Cadastro realizado! Verifique seu email para confirmar."

AuthCallback = Callable[[str, Any], None]


class AuthFailure(Exception):
    """Sign-in or sign-up failed. `str(exc)` is safe to show to the user."""


class Credentials(BaseModel):
    """Email and password typed on the login form."""

    email: str = Field(min_length=3)
    password: str = Field(min_length=6)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: Any) -> str:
        return (v or "").strip()

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("Email must contain '@'")
        return v


def friendly_auth_message(message: str) -> str:
    """Map backend auth errors to what the login form shows."""
    if message == INVALID_CREDENTIALS:
        return INVALID_CREDENTIALS_MESSAGE
    return message


class AuthService:
    """Thin wrapper over the backend auth client."""

    def __init__(self, auth_client: Any) -> None:
        self.auth = auth_client

    def sign_up(self, credentials: Credentials) -> str:
        """Register a new account and return the confirmation message."""
        try:
            self.auth.sign_up({"email": credentials.email, "password": credentials.password})
        except (AuthError, httpx.HTTPError) as e:
            logger.error(f"Sign-up failed for {credentials.email}: {e}")
            raise AuthFailure(friendly_auth_message(_error_message(e))) from e
        logger.info(f"Sign-up requested for {credentials.email}")
        return SIGN_UP_MESSAGE

    def sign_in(self, credentials: Credentials) -> Any:
        """Sign in with email and password and return the new session."""
        try:
            response = self.auth.sign_in_with_password(
                {"email": credentials.email, "password": credentials.password}
            )
        except (AuthError, httpx.HTTPError) as e:
            logger.error(f"Sign-in failed for {credentials.email}: {e}")
            raise AuthFailure(friendly_auth_message(_error_message(e))) from e
        logger.info(f"Signed in as {credentials.email}")
        return response.session

    def get_session(self) -> Any | None:
        """Return the persisted session, if any."""
        try:
            return self.auth.get_session()
        except AuthError as e:
            logger.warning(f"Could not restore session: {e}")
            return None

    def sign_out(self) -> None:
        try:
            self.auth.sign_out()
        except (AuthError, httpx.HTTPError) as e:
            # The local session is cleared by the client even when the remote call fails
            logger.warning(f"Remote sign-out failed: {e}")
        logger.info("Signed out")

    def subscribe(self, callback: AuthCallback) -> Any:
        """Register for auth-state-change notifications. Returns the subscription."""
        return self.auth.on_auth_state_change(callback)


def _error_message(error: Exception) -> str:
    return str(getattr(error, "message", None) or error)
