from .connections import (
    init_database_connections, 
    close_database_connections,
    get_redis_client,
    get_firebase_db_reference
)
from .redis_client import RedisClient
from .firebase_client import FirebaseClient

__all__ = [
    "init_database_connections", 
    "close_database_connections",
    "get_redis_client",
    "get_firebase_db_reference",
    "RedisClient",
    "FirebaseClient"
]
