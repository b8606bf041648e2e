from .models import (
    SensorType,
    SensorData,
    default_user_record,
    format_reading,
    to_reading
)
from .user_record import UserRecordRepository

__all__ = [
    "SensorType",
    "SensorData",
    "default_user_record",
    "format_reading",
    "to_reading",
    "UserRecordRepository"
]
