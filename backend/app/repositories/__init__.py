"""
Repository (DAO) 模块
提供数据库操作的抽象层，封装 CRUD 逻辑
"""

from .profile_repository import ProfileRepository
from .cv_repository import CVRepository
from .postulacion_repository import PostulacionRepository
from .sequence import reconcile_sequence, RECONCILABLE_TABLES

__all__ = [
    "ProfileRepository",
    "CVRepository",
    "PostulacionRepository",
    "reconcile_sequence",
    "RECONCILABLE_TABLES"
]
