"""
Điểm vào chính của ứng dụng IoT Control Service.
"""
import uvicorn
import os
import logging
from datetime import datetime
from dotenv import load_dotenv
from fastapi import FastAPI, status
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from iot_control.config import settings
from iot_control.api.routes import register_routes
from iot_control.infrastructure.logging import setup_logging
from iot_control.infrastructure import get_service_factory
from iot_control.infrastructure.database import (
    init_database_connections,
    close_database_connections,
    get_firebase_db_reference
)

# Tải biến môi trường từ .env
load_dotenv()

# Thiết lập logging
setup_logging()
logger = logging.getLogger(__name__)

# Thông tin phiên bản
VERSION = settings.APP_VERSION
ENV = settings.ENVIRONMENT

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Xử lý vòng đời của ứng dụng (startup và shutdown)."""
    # Startup
    logger.info("Application starting up")

    # Khởi tạo các kết nối database (đợi cho nó hoàn thành)
    await init_database_connections()

    # Khởi tạo tất cả các service
    factory = get_service_factory()
    factory.init_all_services()

    # Tiếp tục xử lý request
    yield

    # Shutdown
    logger.info("Application shutting down")

    # Hủy các listener realtime còn mở
    factory.shutdown()
    close_database_connections()

app = FastAPI(
    title="IoT Control Service",
    description="""
    Service đăng nhập, đăng ký và bảng điều khiển cho thiết bị IoT trên Firebase.

    ## Tính năng chính

    * Đăng nhập, đăng ký, đăng xuất qua Firebase Authentication
    * Hiển thị nhiệt độ và độ ẩm theo thời gian thực từ Realtime Database
    * Bật/tắt LED từ xa
    """,
    version=VERSION,
    lifespan=lifespan
)

register_routes(app)

@app.get("/version", tags=["system"])
async def get_version():
    """Lấy thông tin phiên bản của API."""
    return {
        "version": VERSION,
        "environment": ENV,
        "build_date": os.getenv("BUILD_DATE", "unknown"),
        "commit_hash": os.getenv("COMMIT_HASH", "unknown")
    }

@app.get("/", tags=["system"])
async def root():
    """Route chính."""
    return {
        "service": "IoT Control Service",
        "status": "running",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health"
    }

@app.get("/health", tags=["system"])
async def health_check():
    """Kiểm tra trạng thái hoạt động của service."""
    try:
        factory = get_service_factory()
        redis_ok = factory.create_redis_client().ping()

        # Kiểm tra Firebase bằng một lần đọc nhẹ
        try:
            get_firebase_db_reference("users").get(shallow=True)
            firebase_ok = True
        except Exception as e:
            logger.warning(f"Firebase health check failed: {str(e)}")
            firebase_ok = False

        registry = factory.services.get("dashboard_registry")
        health_status = {
            "status": "healthy" if redis_ok and firebase_ok else "degraded",
            "timestamp": datetime.now().isoformat(),
            "version": VERSION,
            "dashboards": len(registry) if registry is not None else 0,
            "connections": {
                "redis": "ok" if redis_ok else "error",
                "firebase": "ok" if firebase_ok else "error"
            }
        }

        if not redis_ok or not firebase_ok:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content=health_status
            )

        return health_status

    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": "unhealthy",
                "timestamp": datetime.now().isoformat(),
                "error": str(e)
            }
        )

if __name__ == "__main__":
    host = settings.API_HOST
    port = settings.API_PORT

    logger.info(f"Starting server at http://{host}:{port}")
    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=ENV == "development"
    )
