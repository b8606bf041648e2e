"""
Giữ một Dashboard đang hoạt động cho mỗi người dùng đã đăng nhập.
"""
import logging
import threading
from typing import Dict, Optional

from iot_control.core.auth import AuthUser
from iot_control.core.data import UserRecordRepository
from .dashboard import Dashboard

logger = logging.getLogger(__name__)

class DashboardRegistry:
    """
    Tạo Dashboard khi cần và đóng nó khi người dùng đăng xuất.
    """
    
    def __init__(self, user_records: UserRecordRepository):
        self.user_records = user_records
        self._dashboards: Dict[str, Dashboard] = {}
        self._lock = threading.Lock()
        
    def get_or_create(self, user: AuthUser) -> Dashboard:
        """Lấy Dashboard của người dùng, kích hoạt listener nếu mới tạo."""
        with self._lock:
            dashboard = self._dashboards.get(user.uid)
            if dashboard is None:
                dashboard = Dashboard(user, self.user_records)
                dashboard.activate()
                self._dashboards[user.uid] = dashboard
                logger.info(f"Created dashboard for user {user.uid}")
            return dashboard
            
    def get(self, uid: str) -> Optional[Dashboard]:
        with self._lock:
            return self._dashboards.get(uid)
            
    def close(self, uid: str) -> None:
        """Đóng Dashboard của người dùng (nếu có)."""
        with self._lock:
            dashboard = self._dashboards.pop(uid, None)
        if dashboard is not None:
            dashboard.close()
            
    def close_all(self) -> None:
        """Đóng mọi Dashboard, dùng khi service dừng."""
        with self._lock:
            dashboards = list(self._dashboards.values())
            self._dashboards.clear()
        for dashboard in dashboards:
            dashboard.close()
        logger.info(f"Closed {len(dashboards)} dashboards")
        
    def on_auth_state_changed(self, uid: str, user: Optional[AuthUser]) -> None:
        """Listener cho SessionManager: đăng xuất thì đóng Dashboard."""
        if user is None:
            self.close(uid)
            
    def __len__(self) -> int:
        with self._lock:
            return len(self._dashboards)
