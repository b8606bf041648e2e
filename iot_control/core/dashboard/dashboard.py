"""
Bảng điều khiển của một người dùng: hai giá trị cảm biến và cờ LED.
"""
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from firebase_admin import db

from iot_control.core.auth import AuthUser
from iot_control.core.data import (
    SensorData,
    SensorType,
    UserRecordRepository,
    format_reading,
    to_reading
)

logger = logging.getLogger(__name__)

LED_ON_LABEL = "Turn LED OFF"
LED_OFF_LABEL = "Turn LED ON"

# Observer nhận snapshot mới, hoặc None khi dashboard đóng
DashboardObserver = Callable[[Optional[Dict[str, Any]]], None]

class Dashboard:
    """
    Trạng thái hiển thị được giữ đồng bộ với Realtime Database qua listener.
    
    Listener của firebase_admin chạy trên thread riêng nên mọi thay đổi trạng
    thái đều đi qua self._lock.
    """
    
    def __init__(self, user: AuthUser, user_records: UserRecordRepository):
        self.uid = user.uid
        self.email = user.email
        self.user_records = user_records
        
        self.temperature = 0.0
        self.humidity = 0.0
        self.led_status = False
        
        self._lock = threading.RLock()
        self._observers: List[DashboardObserver] = []
        self._sensor_registration: Optional[db.ListenerRegistration] = None
        self._control_registration: Optional[db.ListenerRegistration] = None
        
    @property
    def active(self) -> bool:
        return self._sensor_registration is not None or self._control_registration is not None
        
    def activate(self) -> None:
        """Bắt đầu lắng nghe sensor_data và controls/led_status."""
        with self._lock:
            if self.active:
                return
            self._sensor_registration = self.user_records.listen_sensor_data(self.uid, self._on_sensor_event)
            try:
                self._control_registration = self.user_records.listen_led_status(self.uid, self._on_led_event)
            except Exception:
                self._sensor_registration.close()
                self._sensor_registration = None
                raise
        logger.info(f"Dashboard listeners active for user {self.uid}")
        
    def _on_sensor_event(self, event: db.Event) -> None:
        data = event.data
        changed = False
        with self._lock:
            path = (event.path or "/").strip("/")
            if not path:
                if not isinstance(data, dict):
                    return
                if event.event_type == "patch":
                    # patch chỉ chứa các trường thay đổi; None nghĩa là trường bị xóa
                    if "temperature" in data:
                        self.temperature = to_reading(data["temperature"])
                    if "humidity" in data:
                        self.humidity = to_reading(data["humidity"])
                else:
                    readings = SensorData.from_snapshot(data)
                    self.temperature = readings.temperature
                    self.humidity = readings.humidity
                changed = True
            elif path == SensorType.TEMPERATURE.value:
                self.temperature = to_reading(data)
                changed = True
            elif path == SensorType.HUMIDITY.value:
                self.humidity = to_reading(data)
                changed = True
                
        if changed:
            self._notify()
            
    def _on_led_event(self, event: db.Event) -> None:
        status = event.data
        if not isinstance(status, bool):
            return
        with self._lock:
            self.led_status = status
        self._notify()
        
    def add_observer(self, observer: DashboardObserver) -> Callable[[], None]:
        """
        Đăng ký hàm nhận snapshot mỗi khi trạng thái thay đổi.
        
        Returns:
            Hàm hủy đăng ký
        """
        with self._lock:
            self._observers.append(observer)
            
        def remove():
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)
                    
        return remove
        
    def _notify(self) -> None:
        snapshot = self.snapshot()
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(snapshot)
            except Exception as e:
                logger.error(f"Dashboard observer failed for user {self.uid}: {str(e)}", exc_info=True)
                
    def toggle_led(self) -> bool:
        """
        Ghi giá trị ngược với trạng thái LED đang hiển thị.
        
        Trạng thái hiển thị chỉ đổi khi database phát lại giá trị mới.
        
        Returns:
            Giá trị đã ghi
        """
        with self._lock:
            new_status = not self.led_status
        self.user_records.set_led_status(self.uid, new_status)
        return new_status
        
    def snapshot(self) -> Dict[str, Any]:
        """Trạng thái hiện tại kèm chuỗi hiển thị."""
        with self._lock:
            temperature = self.temperature
            humidity = self.humidity
            led_status = self.led_status
            
        return {
            "user": {
                "uid": self.uid,
                "email": self.email
            },
            "sensors": {
                "temperature": {
                    "value": temperature,
                    "display": format_reading(temperature, SensorType.TEMPERATURE)
                },
                "humidity": {
                    "value": humidity,
                    "display": format_reading(humidity, SensorType.HUMIDITY)
                }
            },
            "led": {
                "status": led_status,
                "label": LED_ON_LABEL if led_status else LED_OFF_LABEL
            }
        }
        
    def close(self) -> None:
        """Hủy cả hai listener; gọi nhiều lần không lỗi."""
        with self._lock:
            registrations = [self._sensor_registration, self._control_registration]
            self._sensor_registration = None
            self._control_registration = None
            observers = list(self._observers)
            self._observers.clear()
            
        for observer in observers:
            try:
                observer(None)
            except Exception as e:
                logger.error(f"Dashboard observer failed on close for user {self.uid}: {str(e)}", exc_info=True)
            
        for registration in registrations:
            if registration is not None:
                try:
                    registration.close()
                except Exception as e:
                    logger.warning(f"Error closing listener for user {self.uid}: {str(e)}")
        logger.info(f"Dashboard closed for user {self.uid}")
