"""
CV 域模型 - 五张 CV 子表
每次写入都是整体替换：先删除该 Profile 的全部行，再按提交内容重新插入
"""

from datetime import date
from typing import Optional

from sqlmodel import Field

from .base import AUTOINCREMENT_TABLE_ARGS, ProfileChildBase


class WorkExperience(ProfileChildBase, table=True):
    """工作经历"""
    __tablename__ = "experiencia_laboral"
    __table_args__ = AUTOINCREMENT_TABLE_ARGS

    empresa: str = Field(nullable=False)
    cargo: str = Field(nullable=False)
    descripcion: Optional[str] = Field(default=None)


class Education(ProfileChildBase, table=True):
    """教育经历"""
    __tablename__ = "educacion"
    __table_args__ = AUTOINCREMENT_TABLE_ARGS

    universidad: str = Field(nullable=False)
    carrera: str = Field(nullable=False)
    fecha_inicio: Optional[date] = Field(default=None)
    # 为空表示仍在就读
    fecha_fin: Optional[date] = Field(default=None)


class Course(ProfileChildBase, table=True):
    """课程与证书"""
    __tablename__ = "cursos"
    __table_args__ = AUTOINCREMENT_TABLE_ARGS

    nombre_curso: str = Field(nullable=False)
    descripcion: Optional[str] = Field(default=None)
    # 课程链接（可选）
    curso: Optional[str] = Field(default=None)


class SkillAssignment(ProfileChildBase, table=True):
    """Profile × Skill 关联行，除外键外不带其他属性"""
    __tablename__ = "usuarios_habilidades"
    __table_args__ = AUTOINCREMENT_TABLE_ARGS

    id_habilidad: int = Field(foreign_key="habilidades.id", index=True, nullable=False)


class LanguageAssignment(ProfileChildBase, table=True):
    """Profile × Language 关联行"""
    __tablename__ = "usuarios_idiomas"
    __table_args__ = AUTOINCREMENT_TABLE_ARGS

    id_idioma: int = Field(foreign_key="idiomas.id", index=True, nullable=False)
