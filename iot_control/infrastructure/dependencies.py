"""
Định nghĩa các dependency cho FastAPI.
"""
import functools
import logging
from typing import Callable, Optional
from fastapi import Header, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from iot_control.core.auth import AuthUser, RegistrationService, SessionManager
from iot_control.core.dashboard import DashboardRegistry
from iot_control.infrastructure import get_service_factory
from iot_control.infrastructure.exceptions import (
    AuthenticationError,
    BaseServiceException,
    service_exception_handler
)

logger = logging.getLogger(__name__)

NOT_SIGNED_IN_MESSAGE = "Not signed in"

def get_bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """
    Lấy ID token từ header Authorization.
    
    Args:
        authorization: Giá trị header dạng "Bearer <token>"
        
    Returns:
        Token hoặc None
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()

async def get_session_manager() -> SessionManager:
    """Dependency để lấy SessionManager."""
    return get_service_factory().create_session_manager()

async def get_registration_service() -> RegistrationService:
    """Dependency để lấy RegistrationService."""
    return get_service_factory().create_registration_service()

async def get_dashboard_registry() -> DashboardRegistry:
    """Dependency để lấy DashboardRegistry."""
    return get_service_factory().create_dashboard_registry()

async def get_current_user(authorization: Optional[str] = Header(None)) -> AuthUser:
    """
    Dependency yêu cầu người dùng đã đăng nhập.
    
    Raises:
        HTTPException: 401 khi không có phiên hợp lệ, 503 khi không kiểm tra được token
    """
    token = get_bearer_token(authorization)
    manager = get_service_factory().create_session_manager()
    try:
        user = await run_in_threadpool(manager.current_user, token)
    except BaseServiceException as e:
        raise service_exception_handler(e)
    if user is None:
        raise service_exception_handler(AuthenticationError(message=NOT_SIGNED_IN_MESSAGE))
    return user

def handle_exceptions(func: Callable) -> Callable:
    """
    Decorator để xử lý exception từ service.
    
    Args:
        func: Function cần wrap
        
    Returns:
        Function đã được wrap
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except BaseServiceException as exc:
            logger.error(f"Service exception: {exc.message}")
            raise service_exception_handler(exc)
        except HTTPException:
            # Nếu đã là HTTP exception, chuyển tiếp
            raise
        except Exception as exc:
            logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={
                    "message": "An unexpected error occurred",
                    "error": str(exc)
                }
            )
            
    return wrapper
