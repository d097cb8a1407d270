"""
求职申请模型 - postulaciones
本服务只读：由职位投递流程写入
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import Field

from .base import AUTOINCREMENT_TABLE_ARGS, ProfileChildBase


class ApplicationStatus(str, Enum):
    """申请状态枚举"""
    ENVIADA = "enviada"
    EN_REVISION = "en_revision"
    ENTREVISTA = "entrevista"
    RECHAZADA = "rechazada"
    CONTRATADO = "contratado"


class JobApplication(ProfileChildBase, table=True):
    """一次职位申请"""
    __tablename__ = "postulaciones"
    __table_args__ = AUTOINCREMENT_TABLE_ARGS

    puesto: str = Field(nullable=False)
    empresa: Optional[str] = Field(default=None)
    estatus: ApplicationStatus = Field(default=ApplicationStatus.ENVIADA, nullable=False)
    fecha_postulacion: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False
    )
