"""
IoT Control Service: đăng nhập, đăng ký và bảng điều khiển cảm biến/LED trên Firebase.
"""
__version__ = "0.1.0"
