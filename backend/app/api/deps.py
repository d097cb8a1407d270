"""
路由依赖

get_session: 每个请求独占一个会话；with 块保证在所有退出路径上恰好释放一次，
关闭时未结束的事务会先回滚，再把连接归还连接池
parse_auth_id: 路由中的认证 ID 必须是正整数，否则在访问数据库前返回 400
"""

from typing import Generator

from fastapi import Request
from sqlmodel import Session

from app.core.errors import ValidationError
from app.schemas.cv import MAX_ID


def get_session(request: Request) -> Generator[Session, None, None]:
    """从应用级引擎（连接池）获取一个请求级会话"""
    with Session(request.app.state.engine) as session:
        yield session


def parse_auth_id(authId: str) -> int:
    """
    校验路径参数 authId

    只接受 ASCII 数字，且在 id 列的取值范围内

    Raises:
        ValidationError: 不是正整数或超出范围
    """
    value = authId.strip()
    if not (value.isascii() and value.isdigit()) or not 0 < int(value) <= MAX_ID:
        raise ValidationError("ID de usuario inválido.", details={"authId": authId})
    return int(value)
