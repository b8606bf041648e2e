# Tránh circular imports
__all__ = ["ServiceFactory", "get_service_factory"]

# Sẽ import ServiceFactory khi được gọi
def get_service_factory():
    from .factory import ServiceFactory
    return ServiceFactory()
