"""
用户画像域模型 - Profile 表 (usuarios.usuarios)
与认证身份一一对应，是所有 CV 子表的外键根节点
"""

from typing import Optional

from sqlmodel import SQLModel, Field

from .base import AUTOINCREMENT_TABLE_ARGS


class Profile(SQLModel, table=True):
    """
    Profile 表
    由单独的建档流程创建；CV 同步只通过 id_userauth 解析出内部 id，
    从不创建或删除 Profile
    """
    __tablename__ = "usuarios"
    __table_args__ = AUTOINCREMENT_TABLE_ARGS

    # 主键：内部 Profile ID，CV 子表的外键目标
    id: Optional[int] = Field(default=None, primary_key=True)

    # 认证系统中的用户 ID
    # 唯一约束保证一个认证身份最多对应一个 Profile
    id_userauth: int = Field(unique=True, index=True, nullable=False)

    # 期望薪资
    salario: Optional[float] = Field(default=None)

    # 外键：职业区域目录
    id_area: Optional[int] = Field(default=None, foreign_key="areas.id")

    # 地址字段，由邮编查询服务预填
    codigo_postal: Optional[str] = Field(default=None, max_length=10)
    estado: Optional[str] = Field(default=None)
    municipio: Optional[str] = Field(default=None)
    colonia: Optional[str] = Field(default=None)
