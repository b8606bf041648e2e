"""
Lớp tiện ích để thao tác với Firebase Realtime Database.
"""
import logging
from typing import Any, Callable, Dict, Optional
import firebase_admin
from firebase_admin import db

from iot_control.infrastructure.exceptions import DataAccessError

logger = logging.getLogger(__name__)

class FirebaseClient:
    """
    Lớp cung cấp các tiện ích để thao tác với Firebase Realtime Database.
    
    Mọi lỗi từ SDK được gói lại thành DataAccessError, giữ nguyên thông điệp gốc.
    """
    
    def __init__(self, base_path: str = ""):
        """
        Khởi tạo client với đường dẫn cơ sở.
        
        Args:
            base_path: Đường dẫn cơ sở trong database
        """
        self.base_path = base_path
        # Đảm bảo Firebase đã được khởi tạo
        if not firebase_admin._apps:
            raise RuntimeError("Firebase app is not initialized. Call firebase_admin.initialize_app() first.")
        
    def _get_reference(self, path: Optional[str] = None) -> db.Reference:
        """
        Lấy tham chiếu đến một đường dẫn trong database.
        
        Args:
            path: Đường dẫn tương đối (sẽ được thêm vào base_path)
            
        Returns:
            Tham chiếu đến database
        """
        if path:
            full_path = f"{self.base_path}/{path}" if self.base_path else path
        else:
            full_path = self.base_path
            
        return db.reference(full_path or "/")
        
    def set(self, path: str, data: Any) -> None:
        """
        Ghi dữ liệu vào đường dẫn cụ thể, ghi đè dữ liệu hiện có.
        
        Args:
            path: Đường dẫn
            data: Dữ liệu cần ghi
        """
        try:
            ref = self._get_reference(path)
            ref.set(data)
            logger.debug(f"Data set at path: {path}")
        except Exception as e:
            logger.error(f"Firebase set error at {path}: {str(e)}")
            raise DataAccessError(message=str(e), source="firebase", details={"path": path}) from e
            
    def get(self, path: str, default: Any = None) -> Any:
        """
        Lấy dữ liệu từ đường dẫn.
        
        Args:
            path: Đường dẫn
            default: Giá trị mặc định nếu không có dữ liệu
            
        Returns:
            Dữ liệu tại đường dẫn
        """
        try:
            ref = self._get_reference(path)
            data = ref.get()
            return data if data is not None else default
        except Exception as e:
            logger.error(f"Firebase get error at {path}: {str(e)}")
            raise DataAccessError(message=str(e), source="firebase", details={"path": path}) from e
            
    def listen(self, path: str, callback: Callable[[db.Event], None]) -> db.ListenerRegistration:
        """
        Đăng ký lắng nghe thay đổi tại đường dẫn.
        
        SDK gọi callback trên một thread nền; sự kiện đầu tiên là 'put' tại '/'
        chứa toàn bộ dữ liệu hiện tại.
        
        Args:
            path: Đường dẫn
            callback: Hàm nhận db.Event (event_type, path, data)
            
        Returns:
            ListenerRegistration, gọi close() để hủy đăng ký
        """
        try:
            ref = self._get_reference(path)
            registration = ref.listen(callback)
            logger.debug(f"Listening at path: {path}")
            return registration
        except Exception as e:
            logger.error(f"Firebase listen error at {path}: {str(e)}")
            raise DataAccessError(message=str(e), source="firebase", details={"path": path}) from e
