"""
Factory để khởi tạo các thành phần chính của ứng dụng.
"""
import logging
from .config.config_loader import ConfigLoader
from .database import RedisClient, FirebaseClient
from .database.connections import get_redis_client, get_firebase_db_reference
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

class ServiceFactory:
    """
    Factory để khởi tạo và quản lý các service dependencies.
    """
    
    _instance = None
    
    def __new__(cls):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super(ServiceFactory, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance
    
    def __init__(self):
        """Khởi tạo factory nếu chưa được khởi tạo."""
        if self._initialized:
            return
            
        logger.info("Initializing ServiceFactory")
        self.config_loader = ConfigLoader()
        self.services = {}
        self._initialized = True
        
    @classmethod
    def reset(cls) -> None:
        """Bỏ instance hiện tại (dùng khi service dừng và trong test)."""
        cls._instance = None
        
    def get_config_loader(self) -> ConfigLoader:
        """
        Lấy instance của ConfigLoader.
        
        Returns:
            ConfigLoader instance
        """
        return self.config_loader
        
    def create_redis_client(self) -> RedisClient:
        """
        Tạo và trả về RedisClient.
        
        Returns:
            RedisClient instance
        """
        if 'redis_client' not in self.services:
            # Dùng kết nối chung từ connections.py thay vì tạo mới
            self.services['redis_client'] = get_redis_client()
            logger.info("Created Redis client")
        return self.services['redis_client']
        
    def create_firebase_client(self, base_path: str = "") -> FirebaseClient:
        """
        Tạo và trả về FirebaseClient.
        
        Args:
            base_path: Đường dẫn cơ sở trong database
            
        Returns:
            FirebaseClient instance
        """
        base_path = base_path or ""
        service_key = f'firebase_client_{base_path}'
        if service_key not in self.services:
            # Đảm bảo Firebase app đã được khởi tạo
            get_firebase_db_reference("")
            self.services[service_key] = FirebaseClient(base_path)
            logger.info(f"Created Firebase client with base path: '{base_path}'")
        return self.services[service_key]
        
    def create_auth_client(self):
        """
        Tạo và trả về FirebaseAuthClient.
        
        Returns:
            FirebaseAuthClient instance
        """
        if 'auth_client' not in self.services:
            from iot_control.adapters.firebase_auth import FirebaseAuthClient
            
            api_key = self.config_loader.get_firebase_web_api_key()
            if not api_key:
                raise ConfigurationError(
                    message="FIREBASE_WEB_API_KEY is not configured",
                    details={"variable": "FIREBASE_WEB_API_KEY"}
                )
            # Đảm bảo Firebase app đã được khởi tạo cho firebase_admin.auth
            get_firebase_db_reference("")
            self.services['auth_client'] = FirebaseAuthClient(
                api_key=api_key,
                base_url=self.config_loader.get('auth.api_url'),
                timeout=self.config_loader.get('auth.timeout', 10)
            )
            logger.info("Created Firebase Auth client")
        return self.services['auth_client']
        
    def create_user_records(self):
        """Tạo và trả về UserRecordRepository."""
        if 'user_records' not in self.services:
            from iot_control.core.data import UserRecordRepository
            
            self.services['user_records'] = UserRecordRepository(
                self.create_firebase_client(),
                self.config_loader
            )
        return self.services['user_records']
        
    def create_auth_service(self):
        """Tạo và trả về AuthService."""
        if 'auth_service' not in self.services:
            from iot_control.core.auth import AuthService
            
            self.services['auth_service'] = AuthService(self.create_auth_client())
        return self.services['auth_service']
        
    def create_session_manager(self):
        """
        Tạo và trả về SessionManager.
        
        DashboardRegistry được đăng ký làm listener để đóng dashboard khi đăng xuất.
        """
        if 'session_manager' not in self.services:
            from iot_control.core.auth import SessionManager
            
            manager = SessionManager(
                auth_service=self.create_auth_service(),
                redis_client=self.create_redis_client(),
                key_prefix=self.config_loader.get('redis.key_prefixes.session', 'session:'),
                session_ttl=self.config_loader.get('auth.session_ttl', 3600)
            )
            manager.add_listener(self.create_dashboard_registry().on_auth_state_changed)
            self.services['session_manager'] = manager
            logger.info("Created session manager")
        return self.services['session_manager']
        
    def create_registration_service(self):
        """Tạo và trả về RegistrationService."""
        if 'registration_service' not in self.services:
            from iot_control.core.auth import RegistrationService
            
            self.services['registration_service'] = RegistrationService(
                self.create_auth_service(),
                self.create_user_records()
            )
        return self.services['registration_service']
        
    def create_dashboard_registry(self):
        """Tạo và trả về DashboardRegistry."""
        if 'dashboard_registry' not in self.services:
            from iot_control.core.dashboard import DashboardRegistry
            
            self.services['dashboard_registry'] = DashboardRegistry(self.create_user_records())
        return self.services['dashboard_registry']
        
    def init_all_services(self) -> None:
        """Khởi tạo tất cả các service."""
        # Kết nối database đã được mở trong lifespan
        self.create_redis_client()
        self.create_firebase_client()
        self.create_session_manager()
        self.create_registration_service()
        logger.info("All services initialized")
        
    def shutdown(self) -> None:
        """Đóng các dashboard còn mở."""
        registry = self.services.get('dashboard_registry')
        if registry is not None:
            registry.close_all()
        logger.info("ServiceFactory shut down")
