"""
Routes API cho thông tin hệ thống.
"""
import logging
import os
from datetime import datetime
from fastapi import APIRouter

from iot_control.infrastructure import get_service_factory

# Khởi tạo logger
logger = logging.getLogger(__name__)

# Tạo router
router = APIRouter()

@router.get("/info", summary="Lấy thông tin hệ thống")
async def get_system_info():
    """
    Lấy thông tin chung về hệ thống, gồm phiên bản, môi trường và số dashboard đang mở.
    """
    factory = get_service_factory()
    system_config = factory.get_config_loader().get("system", {})
    registry = factory.services.get("dashboard_registry")
    
    return {
        "name": system_config.get("name", "IoT Control Service"),
        "version": system_config.get("version", "0.1.0"),
        "environment": system_config.get("environment", "development"),
        "active_dashboards": len(registry) if registry is not None else 0,
        "timestamp": datetime.now().isoformat(),
        "build_date": os.getenv("BUILD_DATE", "unknown"),
        "commit_hash": os.getenv("COMMIT_HASH", "unknown")
    }
