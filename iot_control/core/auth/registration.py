"""
Đăng ký tài khoản mới.
"""
import logging

from iot_control.core.data import UserRecordRepository
from .auth_service import AuthService

logger = logging.getLogger(__name__)

SIGN_UP_SUCCESS_MESSAGE = "Account created successfully! Please login."

class RegistrationService:
    """
    Tạo tài khoản, khởi tạo bản ghi mặc định rồi đăng xuất ngay.
    
    Người dùng phải đăng nhập lại sau khi đăng ký; không có phiên nào được mở.
    """
    
    def __init__(self, auth_service: AuthService, user_records: UserRecordRepository):
        self.auth = auth_service
        self.user_records = user_records
        
    def register(self, email: str, password: str) -> dict:
        """
        Đăng ký người dùng mới.
        
        Args:
            email: Email
            password: Mật khẩu (tối thiểu 6 ký tự)
            
        Returns:
            Dict gồm success, message và uid
        """
        user = self.auth.sign_up(email, password)
        self.user_records.create_default(user.uid)
        self.auth.sign_out(user)
        
        logger.info(f"Registered user {user.uid}")
        return {
            "success": True,
            "message": SIGN_UP_SUCCESS_MESSAGE,
            "uid": user.uid
        }
