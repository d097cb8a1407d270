"""
目录域模型 - 区域 / 技能 / 语言
由外部维护，CV 同步只按 id 引用
"""

from sqlmodel import Field

from .base import AUTOINCREMENT_TABLE_ARGS, CatalogBase


class Area(CatalogBase, table=True):
    """职业区域目录，Profile.id_area 引用此表"""
    __tablename__ = "areas"
    __table_args__ = AUTOINCREMENT_TABLE_ARGS


class Skill(CatalogBase, table=True):
    """技能目录，usuarios_habilidades.id_habilidad 引用此表"""
    __tablename__ = "habilidades"
    __table_args__ = AUTOINCREMENT_TABLE_ARGS


class Language(CatalogBase, table=True):
    """语言目录，usuarios_idiomas.id_idioma 引用此表"""
    __tablename__ = "idiomas"
    __table_args__ = AUTOINCREMENT_TABLE_ARGS

    # ISO 639-1 代码（可选），如 "es"、"en"
    codigo: str = Field(default="", nullable=False)
