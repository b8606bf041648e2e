"""
Client cho Firebase Authentication.

Đăng nhập/đăng ký đi qua Identity Toolkit REST API (Admin SDK không kiểm tra
mật khẩu); xác thực token và thu hồi phiên dùng firebase_admin.auth.
"""
import logging
from typing import Any, Dict, Optional

import requests
from requests.exceptions import RequestException, Timeout
from firebase_admin import auth

from iot_control.infrastructure.exceptions import AuthenticationError, ConnectionError

logger = logging.getLogger(__name__)

# Thông điệp mà SDK client của Firebase hiển thị cho từng mã lỗi
PROVIDER_MESSAGES = {
    "EMAIL_EXISTS": "The email address is already in use by another account.",
    "INVALID_EMAIL": "The email address is badly formatted.",
    "WEAK_PASSWORD": "Password should be at least 6 characters",
    "EMAIL_NOT_FOUND": "There is no user record corresponding to this identifier. The user may have been deleted.",
    "INVALID_PASSWORD": "The password is invalid or the user does not have a password.",
    "INVALID_LOGIN_CREDENTIALS": "The supplied auth credential is incorrect, malformed or has expired.",
    "USER_DISABLED": "The user account has been disabled by an administrator.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "We have blocked all requests from this device due to unusual activity. Try again later.",
    "OPERATION_NOT_ALLOWED": "The given sign-in provider is disabled for this Firebase project.",
    "MISSING_PASSWORD": "The password is invalid or the user does not have a password.",
}


class FirebaseAuthClient:
    """Bọc các lời gọi tới nhà cung cấp định danh Firebase."""

    def __init__(self, api_key: str, base_url: str = "https://identitytoolkit.googleapis.com/v1",
                 timeout: int = 10, session: Optional[requests.Session] = None):
        if not api_key:
            msg = "Firebase Web API key must be provided."
            logger.critical(msg)
            raise ValueError(msg)

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        logger.info(f"Firebase Auth client initialized with endpoint: {self.base_url}")

    @staticmethod
    def translate_error(raw_message: Optional[str], fallback: str) -> Dict[str, Optional[str]]:
        """
        Chuyển mã lỗi của Identity Toolkit thành thông điệp cho người dùng.

        Args:
            raw_message: Trường error.message trong phản hồi, ví dụ
                "WEAK_PASSWORD : Password should be at least 6 characters"
            fallback: Thông điệp khi phản hồi không có nội dung

        Returns:
            Dict gồm 'code' và 'message'
        """
        if not raw_message:
            return {"code": None, "message": fallback}

        code, _, detail = raw_message.partition(" : ")
        code = code.strip()
        if code in PROVIDER_MESSAGES:
            return {"code": code, "message": PROVIDER_MESSAGES[code]}
        return {"code": code, "message": detail.strip() or raw_message}

    def _post(self, endpoint: str, payload: Dict[str, Any], fallback: str) -> Dict[str, Any]:
        url = f"{self.base_url}/{endpoint}"
        try:
            response = self.session.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout
            )
        except Timeout as e:
            logger.error(f"Timeout calling Firebase Auth {endpoint} ({self.timeout}s)")
            raise ConnectionError(message=str(e) or fallback, service_name="firebase_auth") from e
        except RequestException as e:
            logger.error(f"Error calling Firebase Auth {endpoint}: {e}")
            raise ConnectionError(message=str(e) or fallback, service_name="firebase_auth") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code != 200:
            raw = (body.get("error") or {}).get("message") if isinstance(body, dict) else None
            error = self.translate_error(raw, fallback)
            logger.warning(f"Firebase Auth {endpoint} rejected: {error['code'] or response.status_code}")
            raise AuthenticationError(message=error["message"], provider_code=error["code"])

        return body

    def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        """
        Đăng nhập bằng email và mật khẩu.

        Returns:
            Phản hồi gồm localId, email, idToken, refreshToken, expiresIn
        """
        return self._post(
            "accounts:signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
            fallback="Failed to sign in"
        )

    def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        """
        Tạo tài khoản mới bằng email và mật khẩu.

        Returns:
            Phản hồi gồm localId, email, idToken, refreshToken, expiresIn
        """
        return self._post(
            "accounts:signUp",
            {"email": email, "password": password, "returnSecureToken": True},
            fallback="Failed to sign up"
        )

    def verify_id_token(self, id_token: str) -> Dict[str, Any]:
        """
        Xác thực ID token, kể cả kiểm tra token đã bị thu hồi.

        Returns:
            Các claim đã giải mã (uid, email, exp, ...)
        """
        try:
            return auth.verify_id_token(id_token, check_revoked=True)
        except auth.RevokedIdTokenError as e:
            raise AuthenticationError(message="The user's session has been revoked.", provider_code="TOKEN_REVOKED") from e
        except (auth.ExpiredIdTokenError, auth.InvalidIdTokenError) as e:
            raise AuthenticationError(message=str(e), provider_code="INVALID_ID_TOKEN") from e
        except auth.UserDisabledError as e:
            raise AuthenticationError(message=PROVIDER_MESSAGES["USER_DISABLED"], provider_code="USER_DISABLED") from e
        except auth.UserNotFoundError as e:
            raise AuthenticationError(message=PROVIDER_MESSAGES["EMAIL_NOT_FOUND"], provider_code="USER_NOT_FOUND") from e
        except auth.CertificateFetchError as e:
            raise ConnectionError(message=f"Failed to fetch token certificates: {str(e)}", service_name="firebase_auth") from e

    def revoke_refresh_tokens(self, uid: str) -> None:
        """Thu hồi mọi refresh token của người dùng (đăng xuất phía server)."""
        try:
            auth.revoke_refresh_tokens(uid)
            logger.info(f"Revoked refresh tokens for user {uid}")
        except auth.UserNotFoundError as e:
            raise AuthenticationError(message=str(e), provider_code="USER_NOT_FOUND") from e
