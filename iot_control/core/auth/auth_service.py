"""
Đăng nhập, đăng ký và đăng xuất qua Firebase Authentication.
"""
import logging
from typing import Tuple

from iot_control.adapters.firebase_auth import FirebaseAuthClient
from iot_control.config.settings import MIN_PASSWORD_LENGTH
from iot_control.infrastructure.exceptions import ValidationError
from .models import AuthUser

logger = logging.getLogger(__name__)

EMPTY_EMAIL_MESSAGE = "Please enter your email"
EMPTY_PASSWORD_MESSAGE = "Please enter your password"
SHORT_PASSWORD_MESSAGE = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"

def validate_credentials(email: str, password: str, check_length: bool = False) -> Tuple[str, str]:
    """
    Kiểm tra các trường nhập và trả về giá trị đã cắt khoảng trắng.
    
    Args:
        email: Email người dùng nhập
        password: Mật khẩu người dùng nhập
        check_length: Kiểm tra độ dài tối thiểu (chỉ khi đăng ký)
        
    Returns:
        Tuple (email, password) đã trim
        
    Raises:
        ValidationError: Khi trường trống hoặc mật khẩu quá ngắn
    """
    email = (email or "").strip()
    password = (password or "").strip()
    
    if not email:
        raise ValidationError(message=EMPTY_EMAIL_MESSAGE, field="email")
    if not password:
        raise ValidationError(message=EMPTY_PASSWORD_MESSAGE, field="password")
    if check_length and len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(message=SHORT_PASSWORD_MESSAGE, field="password")
        
    return email, password

class AuthService:
    """
    Lớp mỏng trên FirebaseAuthClient: kiểm tra đầu vào rồi gọi nhà cung cấp.
    """
    
    def __init__(self, auth_client: FirebaseAuthClient):
        self.client = auth_client
        
    def sign_in(self, email: str, password: str) -> AuthUser:
        """
        Đăng nhập bằng email và mật khẩu.
        
        Raises:
            ValidationError: Trường trống
            AuthenticationError: Nhà cung cấp từ chối, thông điệp giữ nguyên
        """
        email, password = validate_credentials(email, password)
        user = AuthUser.from_provider(self.client.sign_in_with_password(email, password))
        logger.info(f"User {user.uid} signed in")
        return user
        
    def sign_up(self, email: str, password: str) -> AuthUser:
        """
        Tạo tài khoản mới.
        
        Raises:
            ValidationError: Trường trống hoặc mật khẩu ngắn
            AuthenticationError: Nhà cung cấp từ chối, thông điệp giữ nguyên
        """
        email, password = validate_credentials(email, password, check_length=True)
        user = AuthUser.from_provider(self.client.sign_up(email, password))
        logger.info(f"User {user.uid} signed up")
        return user
        
    def sign_out(self, user: AuthUser) -> None:
        """Thu hồi refresh token của người dùng."""
        self.client.revoke_refresh_tokens(user.uid)
        logger.info(f"User {user.uid} signed out")
        
    def verify(self, id_token: str) -> AuthUser:
        """Xác thực ID token và trả về người dùng tương ứng."""
        claims = self.client.verify_id_token(id_token)
        return AuthUser.from_claims(claims, id_token=id_token)
