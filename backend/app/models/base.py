"""
基础数据库配置模块
提供 usuarios 模式下所有表共用的基础字段
"""

from typing import Optional

from sqlmodel import SQLModel, Field

# SQLite 下启用 AUTOINCREMENT，使每张表拥有独立的 sqlite_sequence 计数器
# PostgreSQL 忽略该参数，使用 SERIAL 序列
AUTOINCREMENT_TABLE_ARGS = {"sqlite_autoincrement": True}


class CatalogBase(SQLModel):
    """目录表基类：只有 id 和唯一名称（areas / habilidades / idiomas）"""
    id: Optional[int] = Field(default=None, primary_key=True)
    nombre: str = Field(unique=True, nullable=False)


class ProfileChildBase(SQLModel):
    """
    CV 子表基类
    所有子表都通过 id_usuario 归属于一个 Profile（usuarios.id）
    """
    # 主键，由序列生成，调用方不会跨请求引用
    id: Optional[int] = Field(default=None, primary_key=True)

    # 外键：归属 Profile，删除 Profile 时级联删除
    # 索引优化：同步时按 id_usuario 整体删除
    id_usuario: int = Field(
        foreign_key="usuarios.id",
        ondelete="CASCADE",
        index=True,
        nullable=False
    )
