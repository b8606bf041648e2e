"""
Bộ tải cấu hình tập trung cho ứng dụng.
"""
import os
import logging
from typing import Any, Dict, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

class ConfigLoader:
    """
    Bộ tải và quản lý cấu hình tập trung.
    """
    
    def __init__(self, load_env: bool = True, env_file: Optional[str] = None):
        """
        Khởi tạo bộ tải cấu hình.
        
        Args:
            load_env: Tự động tải biến môi trường từ .env
            env_file: Đường dẫn đến tệp .env
        """
        self.config = {}
        
        # Tải biến môi trường
        if load_env:
            load_dotenv(dotenv_path=env_file)
            
        # Tải các module cấu hình
        self._load_all_configs()
        
    def _load_all_configs(self) -> None:
        """Tải tất cả các module cấu hình."""
        from iot_control.config.firebase_config import PATHS
        self.config['firebase'] = {
            'paths': PATHS
        }
        
        from iot_control.config.redis_config import KEY_PREFIXES
        self.config['redis'] = {
            'key_prefixes': KEY_PREFIXES
        }
        
        from iot_control.config import settings
        self.config['auth'] = {
            'api_url': settings.FIREBASE_AUTH_URL,
            'timeout': settings.AUTH_REQUEST_TIMEOUT,
            'session_ttl': settings.SESSION_TTL
        }
        self.config['system'] = {
            'name': settings.APP_NAME,
            'version': settings.APP_VERSION,
            'environment': settings.ENVIRONMENT
        }
            
        logger.info(f"Loaded configuration modules: {', '.join(self.config.keys())}")
        
    def get(self, key: str, default: Any = None) -> Any:
        """
        Lấy giá trị cấu hình theo khóa.
        
        Args:
            key: Khóa cấu hình (ví dụ: 'firebase.paths.sensor_data')
            default: Giá trị mặc định nếu không tìm thấy
            
        Returns:
            Giá trị cấu hình
        """
        if not key:
            return default
            
        # Phân tách khóa thành các phần
        parts = key.split('.')
        
        # Duyệt qua cấu trúc cấu hình
        current = self.config
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
                
        return current
        
    def get_firebase_web_api_key(self) -> str:
        """
        Lấy Web API key dùng cho Identity Toolkit REST API.
        
        Returns:
            API key (chuỗi rỗng nếu chưa cấu hình)
        """
        return os.getenv('FIREBASE_WEB_API_KEY', '')
        
    def get_path(self, name: str, uid: str) -> str:
        """
        Lấy đường dẫn database của người dùng.
        
        Args:
            name: Tên đường dẫn (user, sensor_data, led_status)
            uid: ID người dùng
            
        Returns:
            Đường dẫn đã điền uid
        """
        template = self.get(f'firebase.paths.{name}')
        if template is None:
            raise KeyError(f"Unknown database path: {name}")
        return template.format(uid=uid)
