"""
Thiết lập hệ thống logging.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
import os

from iot_control.config import settings

def setup_logging(log_dir: str = None, level: str = None):
    """Thiết lập cấu hình logging cho ứng dụng."""
    log_dir = log_dir or settings.LOG_DIR
    level = (level or settings.LOG_LEVEL).upper()
    
    # Tạo thư mục logs nếu chưa tồn tại
    os.makedirs(log_dir, exist_ok=True)
    
    # Cấu hình logger chính
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level, logging.INFO))
    
    # Tránh gắn handler hai lần khi uvicorn reload
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    
    # Định dạng log
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    
    # Handler log vào file, với rotation
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "iot_control.log"),
        maxBytes=10485760,  # 10MB
        backupCount=5,      # Giữ 5 file backup
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    
    # Handler log ra console
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    
    # Thêm handlers vào logger
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    
    # Giảm độ ồn của các thư viện bên ngoài
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('google').setLevel(logging.WARNING)
    
    logger.info("Logging system initialized")
