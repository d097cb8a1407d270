"""
路由模块
每个模块负责一组相关的端点
"""

from .cv import router as cv_router
from .postulaciones import router as postulaciones_router
from .health import router as health_router

__all__ = [
    "cv_router",
    "postulaciones_router",
    "health_router",
]
