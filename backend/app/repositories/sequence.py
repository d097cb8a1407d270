"""
序列对齐 (Sequence Reconciler)

CV 同步采用"整体删除 + 整体插入"，自增计数器若不调整，要么与现有行冲突，
要么留下越来越大的空洞。reconcile_sequence 读取表中当前最大 id，
把计数器设置为"下一个值 = MAX(id) + 1"（空表视为 0）。

表名和列名会被拼接进 SQL，因此只接受 RECONCILABLE_TABLES 白名单中的值，
绝不能来自调用方输入。
"""

import logging
from typing import Dict, Tuple

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.errors import StoreError
from app.models.cv import WorkExperience, Education, Course, SkillAssignment, LanguageAssignment

logger = logging.getLogger(__name__)


# 白名单：表名 -> 允许对齐的 id 列
RECONCILABLE_TABLES: Dict[str, Tuple[str, ...]] = {
    model.__tablename__: ("id",)
    for model in (WorkExperience, Education, Course, SkillAssignment, LanguageAssignment)
}


def _check_allowed(table: str, id_column: str) -> None:
    if id_column not in RECONCILABLE_TABLES.get(table, ()):
        raise ValueError(f"Table/column not eligible for sequence reconciliation: {table}.{id_column}")


def _reconcile_postgresql(session: Session, table: str, id_column: str) -> int:
    # is_called=false：下一次 nextval 返回的就是设置的值本身
    statement = text(
        f"SELECT setval(pg_get_serial_sequence(:table_name, :column_name), "
        f"COALESCE(MAX({id_column}), 0) + 1, false) FROM {table}"
    )
    next_value = session.exec(
        statement, params={"table_name": table, "column_name": id_column}
    ).scalar()
    if next_value is None:
        raise StoreError(f"No sequence found for {table}.{id_column}")
    return int(next_value)


def _reconcile_sqlite(session: Session, table: str, id_column: str) -> int:
    # AUTOINCREMENT 表的计数器保存在 sqlite_sequence 中，下一个 id = seq + 1
    current_max = session.exec(
        text(f"SELECT COALESCE(MAX({id_column}), 0) FROM {table}")
    ).scalar_one()
    params = {"table_name": table, "seq": current_max}
    updated = session.exec(
        text("UPDATE sqlite_sequence SET seq = :seq WHERE name = :table_name"),
        params=params
    )
    if updated.rowcount == 0:
        # 表从未分配过 id 时没有计数器行；非 AUTOINCREMENT 表根本没有计数器
        table_sql = session.exec(
            text("SELECT sql FROM sqlite_master WHERE type = 'table' AND name = :table_name"),
            params={"table_name": table}
        ).scalar()
        if table_sql is None or "AUTOINCREMENT" not in table_sql.upper():
            raise StoreError(f"No sequence found for {table}.{id_column}")
        session.exec(
            text("INSERT INTO sqlite_sequence (name, seq) VALUES (:table_name, :seq)"),
            params=params
        )
    return int(current_max) + 1


def reconcile_sequence(session: Session, table: str, id_column: str = "id") -> int:
    """
    将表的自增计数器对齐到当前内容

    在调用方的事务内执行，不提交。重复调用（中间无写入）结果相同。

    Args:
        session: 当前事务所在的数据库会话
        table: 白名单内的表名
        id_column: 白名单内的 id 列

    Returns:
        下一次插入将生成的 id

    Raises:
        ValueError: 表名或列名不在白名单内
        StoreError: 表或计数器不存在，或驱动报错；调用方应中止整个事务
    """
    _check_allowed(table, id_column)

    dialect = session.get_bind().dialect.name
    try:
        if dialect == "postgresql":
            next_value = _reconcile_postgresql(session, table, id_column)
        elif dialect == "sqlite":
            next_value = _reconcile_sqlite(session, table, id_column)
        else:
            raise StoreError(f"Sequence reconciliation not supported for dialect '{dialect}'")
    except SQLAlchemyError as exc:
        raise StoreError(
            f"Failed to reconcile sequence for {table}.{id_column}",
            details=str(exc.orig if getattr(exc, "orig", None) is not None else exc)
        ) from exc

    logger.debug("Sequence for %s.%s reconciled, next id %s", table, id_column, next_value)
    return next_value
