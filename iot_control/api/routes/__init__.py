"""
Đăng ký tất cả API routes.
"""

def register_routes(app):
    """
    Đăng ký tất cả routes API với ứng dụng FastAPI.
    
    Args:
        app: Đối tượng FastAPI app
    """
    # Import routes ở đây để tránh circular import
    from .auth_routes import router as auth_router
    from .dashboard_routes import router as dashboard_router
    from .system_routes import router as system_router
    
    # Đăng ký routers với ứng dụng
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(dashboard_router, prefix="/api/dashboard", tags=["dashboard"])
    app.include_router(system_router, prefix="/api/system", tags=["system"])
