"""
Models dữ liệu cho bản ghi người dùng trong Realtime Database.
"""
import copy
import logging
from typing import Any, Dict, Optional, Union
from enum import Enum
from pydantic import BaseModel

from iot_control.config.firebase_config import USER_RECORD_DEFAULTS, SENSOR_UNITS

logger = logging.getLogger(__name__)

class SensorType(str, Enum):
    """Các loại cảm biến được hiển thị."""
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"

def to_reading(value: Any, default: float = 0.0) -> float:
    """
    Chuyển giá trị từ database thành số thực.
    
    None trả về default; giá trị không phải số cũng trả về default (có log).
    """
    if value is None:
        return default
    if isinstance(value, bool):
        logger.warning(f"Ignoring non-numeric sensor value: {value!r}")
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric sensor value: {value!r}")
        return default

def format_reading(value: float, sensor_type: SensorType) -> str:
    """Định dạng giá trị cảm biến với 1 chữ số thập phân và đơn vị."""
    return f"{value:.1f}{SENSOR_UNITS[sensor_type.value]}"

class SensorData(BaseModel):
    """Nhóm sensor_data của người dùng."""
    temperature: float = 0.0
    humidity: float = 0.0
    last_updated: Union[int, float] = 0

    @classmethod
    def from_snapshot(cls, data: Optional[Dict[str, Any]]) -> "SensorData":
        """Tạo từ dữ liệu đọc được; thiếu trường thì dùng mặc định."""
        if not isinstance(data, dict):
            return cls()
        last_updated = data.get("last_updated", 0)
        if not isinstance(last_updated, (int, float)) or isinstance(last_updated, bool):
            last_updated = 0
        return cls(
            temperature=to_reading(data.get("temperature")),
            humidity=to_reading(data.get("humidity")),
            last_updated=last_updated
        )

def default_user_record() -> Dict[str, Any]:
    """Bản ghi mặc định được ghi khi đăng ký (bản sao độc lập)."""
    return copy.deepcopy(USER_RECORD_DEFAULTS)
