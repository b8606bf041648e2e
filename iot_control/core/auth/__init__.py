from .models import AuthUser
from .auth_service import (
    AuthService,
    validate_credentials,
    EMPTY_EMAIL_MESSAGE,
    EMPTY_PASSWORD_MESSAGE,
    SHORT_PASSWORD_MESSAGE
)
from .session_manager import SessionManager
from .registration import RegistrationService, SIGN_UP_SUCCESS_MESSAGE

__all__ = [
    "AuthUser",
    "AuthService",
    "validate_credentials",
    "EMPTY_EMAIL_MESSAGE",
    "EMPTY_PASSWORD_MESSAGE",
    "SHORT_PASSWORD_MESSAGE",
    "SessionManager",
    "RegistrationService",
    "SIGN_UP_SUCCESS_MESSAGE"
]
