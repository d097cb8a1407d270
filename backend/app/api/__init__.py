"""
HTTP 接口模块
提供 FastAPI 路由、依赖注入和异常映射
"""

from .deps import get_session, parse_auth_id
from .routes import cv_router, postulaciones_router, health_router

__all__ = [
    "get_session",
    "parse_auth_id",
    "cv_router",
    "postulaciones_router",
    "health_router",
]
