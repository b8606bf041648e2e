"""
Truy cập bản ghi người dùng trong Firebase Realtime Database.
"""
import logging
from typing import Callable

from firebase_admin import db

from iot_control.infrastructure.config import ConfigLoader
from iot_control.infrastructure.database import FirebaseClient
from .models import SensorData, default_user_record

logger = logging.getLogger(__name__)

class UserRecordRepository:
    """
    Đọc, ghi và lắng nghe các nhánh của users/{uid}.
    """
    
    def __init__(self, firebase_client: FirebaseClient, config: ConfigLoader):
        self.firebase = firebase_client
        self.config = config
        
    def create_default(self, uid: str) -> None:
        """
        Ghi toàn bộ bản ghi mặc định cho người dùng mới.
        
        Args:
            uid: ID người dùng
        """
        path = self.config.get_path("user", uid)
        self.firebase.set(path, default_user_record())
        logger.info(f"Created default record for user {uid}")
        
    def get_sensor_data(self, uid: str) -> SensorData:
        """Đọc nhóm sensor_data hiện tại."""
        data = self.firebase.get(self.config.get_path("sensor_data", uid))
        return SensorData.from_snapshot(data)
        
    def get_led_status(self, uid: str) -> bool:
        """Đọc trạng thái LED; không có giá trị hoặc không phải bool thì là False."""
        value = self.firebase.get(self.config.get_path("led_status", uid))
        return value if isinstance(value, bool) else False
        
    def set_led_status(self, uid: str, value: bool) -> None:
        """
        Ghi cờ điều khiển LED.
        
        Args:
            uid: ID người dùng
            value: Trạng thái mới
        """
        self.firebase.set(self.config.get_path("led_status", uid), bool(value))
        logger.info(f"LED status for user {uid} set to {bool(value)}")
        
    def listen_sensor_data(self, uid: str, callback: Callable[[db.Event], None]) -> db.ListenerRegistration:
        """Lắng nghe thay đổi của sensor_data."""
        return self.firebase.listen(self.config.get_path("sensor_data", uid), callback)
        
    def listen_led_status(self, uid: str, callback: Callable[[db.Event], None]) -> db.ListenerRegistration:
        """Lắng nghe thay đổi của controls/led_status."""
        return self.firebase.listen(self.config.get_path("led_status", uid), callback)
