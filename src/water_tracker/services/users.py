"""Account sign-up and authentication."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from werkzeug.security import check_password_hash, generate_password_hash

from water_tracker.domain.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    SignupValidationError,
)
from water_tracker.domain.models import ProfileRecord

_logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MAX_USERNAME_LENGTH = 20
MAX_EMAIL_LENGTH = 128
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 32


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_by_email(self, email: str) -> ProfileRecord | None:
        """Return the profile for an email, if present."""

    def email_exists(self, email: str) -> bool:
        """Return True when a profile already uses the email."""

    def create_profile(
        self, username: str, email: str, password_hash: str
    ) -> ProfileRecord:
        """Create and return a new profile."""


@dataclass
class UserService:
    """Application service for account lifecycle actions."""

    repository: ProfileRepository

    def sign_up(self, username: str, email: str, password: str) -> ProfileRecord:
        """Validate input and create a profile with a hashed password."""
        username = username.strip()
        email = email.strip()
        _validate_signup(username, email, password)
        if self.repository.email_exists(email):
            raise DuplicateEmailError("An account with this email already exists.")
        profile = self.repository.create_profile(
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
        )
        _logger.info("Profile created: profile_id=%s", profile.id)
        return profile

    def authenticate(self, email: str, password: str) -> ProfileRecord:
        """Return the profile matching the credentials."""
        profile = self.repository.get_by_email(email.strip())
        if profile is None or not check_password_hash(profile.password_hash, password):
            _logger.info("Rejected login attempt")
            raise InvalidCredentialsError
        _logger.info("Profile authenticated: profile_id=%s", profile.id)
        return profile


def _validate_signup(username: str, email: str, password: str) -> None:
    if not username or not email or not password:
        raise SignupValidationError("All fields are required.")
    if len(username) > MAX_USERNAME_LENGTH:
        raise SignupValidationError("Username must be 20 characters or fewer.")
    if len(email) > MAX_EMAIL_LENGTH or not _EMAIL_PATTERN.match(email):
        raise SignupValidationError("Please enter a valid email address.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise SignupValidationError("Password must be at least 8 characters long.")
    if len(password) > MAX_PASSWORD_LENGTH:
        raise SignupValidationError("Password cannot be over 32 characters.")
