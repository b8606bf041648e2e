"""
Lớp wrapper cho kết nối và thao tác với Redis.
"""
import json
import logging
import redis
from typing import Any, Optional, Union
from datetime import timedelta

logger = logging.getLogger(__name__)

class RedisClient:
    """
    Lớp wrapper cung cấp các tiện ích để làm việc với Redis.
    """
    
    def __init__(self, host: str, port: int, db: int = 0, password: Optional[str] = None):
        """
        Khởi tạo kết nối Redis.
        
        Args:
            host: Máy chủ Redis
            port: Cổng Redis
            db: Số database Redis
            password: Mật khẩu Redis (nếu có)
        """
        self.connection_params = {
            'host': host,
            'port': port,
            'db': db,
            'decode_responses': True  # Tự động chuyển đổi bytes thành string
        }
        
        if password:
            self.connection_params['password'] = password
            
        self.redis = self._create_connection()
        
    def _create_connection(self) -> redis.Redis:
        """Tạo và trả về kết nối Redis."""
        try:
            client = redis.Redis(**self.connection_params)
            # Kiểm tra kết nối
            client.ping()
            logger.info(f"Redis connection established: {self.connection_params['host']}:{self.connection_params['port']}")
            return client
        except redis.ConnectionError as e:
            logger.error(f"Failed to connect to Redis: {str(e)}")
            raise
            
    def ping(self) -> bool:
        """Kiểm tra Redis còn phản hồi hay không."""
        try:
            return bool(self.redis.ping())
        except redis.RedisError as e:
            logger.error(f"Redis ping error: {str(e)}")
            return False
            
    def set(self, key: str, value: Any, expire: Optional[Union[int, timedelta]] = None) -> bool:
        """
        Lưu giá trị vào Redis.
        
        Args:
            key: Khóa
            value: Giá trị (sẽ được tự động chuyển đổi thành JSON nếu là dict/list)
            expire: Thời gian hết hạn (giây hoặc timedelta)
            
        Returns:
            bool: Thành công hay thất bại
        """
        try:
            # Chuyển đổi giá trị phức tạp thành JSON
            if isinstance(value, (dict, list)):
                value = json.dumps(value)
                
            # Xử lý thời gian hết hạn
            if isinstance(expire, timedelta):
                expire = int(expire.total_seconds())
                
            return bool(self.redis.set(key, value, ex=expire))
        except redis.RedisError as e:
            logger.error(f"Redis set error: {str(e)}")
            return False
            
    def get(self, key: str, default: Any = None) -> Any:
        """
        Lấy giá trị từ Redis.
        
        Args:
            key: Khóa
            default: Giá trị mặc định nếu khóa không tồn tại
            
        Returns:
            Giá trị tương ứng với khóa
        """
        try:
            value = self.redis.get(key)
            if value is None:
                return default
                
            # Thử chuyển đổi từ JSON
            try:
                return json.loads(value)
            except (TypeError, json.JSONDecodeError):
                return value
        except redis.RedisError as e:
            logger.error(f"Redis get error: {str(e)}")
            return default
            
    def delete(self, *keys: str) -> int:
        """
        Xóa một hoặc nhiều khóa.
        
        Args:
            keys: Danh sách khóa cần xóa
            
        Returns:
            int: Số khóa đã được xóa
        """
        try:
            return self.redis.delete(*keys)
        except redis.RedisError as e:
            logger.error(f"Redis delete error: {str(e)}")
            return 0
            
    def close(self) -> None:
        """Đóng kết nối Redis."""
        if self.redis is not None:
            self.redis.close()
            logger.info("Redis connection closed")
