"""
核心模块
提供全服务共用的异常类型
"""

from .errors import (
    UsuariosError,
    ValidationError,
    NotFoundError,
    ProfileNotFoundError,
    ConstraintViolationError,
    StoreError,
    ExportError,
)

__all__ = [
    "UsuariosError",
    "ValidationError",
    "NotFoundError",
    "ProfileNotFoundError",
    "ConstraintViolationError",
    "StoreError",
    "ExportError",
]
