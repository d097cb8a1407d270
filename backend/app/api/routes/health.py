"""
健康检查路由
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.api.deps import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(session: Session = Depends(get_session)):
    """
    通过一次简单查询确认数据库可达

    数据库不可用时返回 503，供容器编排判断
    """
    try:
        session.exec(text("SELECT 1")).scalar_one()
    except SQLAlchemyError as e:
        logger.error("Health check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "error", "details": str(e)}
        )
    return {"status": "ok", "database": "ok"}
