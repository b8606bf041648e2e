"""
Quản lý phiên đăng nhập và thông báo thay đổi trạng thái xác thực.
"""
import logging
import threading
from datetime import datetime
from typing import Callable, Dict, List, Optional

from iot_control.infrastructure.database import RedisClient
from iot_control.infrastructure.exceptions import AuthenticationError, ConnectionError
from .auth_service import AuthService
from .models import AuthUser

logger = logging.getLogger(__name__)

# Listener nhận (uid, user); user là None khi người dùng đăng xuất
AuthStateListener = Callable[[str, Optional[AuthUser]], None]

class SessionManager:
    """
    Lưu phiên trong Redis và phát thông báo khi người dùng đăng nhập/đăng xuất.
    """
    
    def __init__(self, auth_service: AuthService, redis_client: RedisClient,
                 key_prefix: str = "session:", session_ttl: int = 3600):
        self.auth = auth_service
        self.redis = redis_client
        self.key_prefix = key_prefix
        self.session_ttl = session_ttl
        self._listeners: List[AuthStateListener] = []
        self._lock = threading.Lock()
        
    def _key(self, uid: str) -> str:
        return f"{self.key_prefix}{uid}"
        
    def add_listener(self, listener: AuthStateListener) -> Callable[[], None]:
        """
        Đăng ký listener cho thay đổi trạng thái xác thực.
        
        Returns:
            Hàm hủy đăng ký
        """
        with self._lock:
            self._listeners.append(listener)
            
        def remove():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
                    
        return remove
        
    def _notify(self, uid: str, user: Optional[AuthUser]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(uid, user)
            except Exception as e:
                logger.error(f"Auth state listener failed for user {uid}: {str(e)}", exc_info=True)
                
    def start(self, user: AuthUser) -> None:
        """
        Lưu phiên của người dùng vừa đăng nhập.
        
        Raises:
            ConnectionError: Nếu không ghi được phiên vào Redis
        """
        session = {
            "uid": user.uid,
            "email": user.email,
            "started_at": datetime.now().isoformat()
        }
        ttl = min(user.expires_in, self.session_ttl) if user.expires_in else self.session_ttl
        if not self.redis.set(self._key(user.uid), session, expire=ttl):
            raise ConnectionError(
                message="Failed to store session",
                service_name="redis",
                details={"uid": user.uid}
            )
        logger.info(f"Session started for user {user.uid}")
        self._notify(user.uid, user)
        
    def end(self, user: AuthUser) -> None:
        """Xóa phiên của người dùng."""
        self.redis.delete(self._key(user.uid))
        logger.info(f"Session ended for user {user.uid}")
        self._notify(user.uid, None)
        
    def sign_in(self, email: str, password: str) -> AuthUser:
        """Đăng nhập và mở phiên."""
        user = self.auth.sign_in(email, password)
        self.start(user)
        return user
        
    def sign_out(self, user: AuthUser) -> None:
        """Thu hồi token và đóng phiên."""
        self.auth.sign_out(user)
        self.end(user)
        
    def current_user(self, id_token: Optional[str]) -> Optional[AuthUser]:
        """
        Trả về người dùng hiện tại của token, hoặc None nếu chưa đăng nhập.
        
        Token hợp lệ nhưng phiên đã đóng cũng được coi là chưa đăng nhập.
        """
        if not id_token:
            return None
        try:
            user = self.auth.verify(id_token)
        except AuthenticationError as e:
            logger.debug(f"Token rejected: {e.message}")
            return None
            
        session = self.redis.get(self._key(user.uid))
        if not session:
            return None
        if not user.email and isinstance(session, dict):
            user.email = session.get("email")
        return user
        
    def auth_state(self, id_token: Optional[str]) -> Dict[str, object]:
        """
        Cho biết màn hình nào nên hiển thị với token hiện tại.
        
        Returns:
            Dict gồm authenticated, view (dashboard|login) và user
        """
        user = self.current_user(id_token)
        return {
            "authenticated": user is not None,
            "view": "dashboard" if user else "login",
            "user": user.public() if user else None
        }
