"""
Cấu hình cho Firebase.
"""

# Đường dẫn tương đối bên dưới users/{uid}
PATHS = {
    "user": "users/{uid}",
    "sensor_data": "users/{uid}/sensor_data",
    "led_status": "users/{uid}/controls/led_status"
}

# Bản ghi mặc định được ghi khi đăng ký tài khoản
USER_RECORD_DEFAULTS = {
    "sensor_data": {
        "temperature": 0.0,
        "humidity": 0.0,
        "last_updated": 0    # Chỗ giữ timestamp, thiết bị sẽ cập nhật
    },
    "controls": {
        "led_status": False  # LED tắt khi mới tạo
    }
}

# Đơn vị hiển thị cho từng cảm biến
SENSOR_UNITS = {
    "temperature": "°C",
    "humidity": "%"
}
