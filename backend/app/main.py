"""
Usuarios / CV 服务 - FastAPI 应用入口

- 进程启动时创建一次数据库引擎（连接池），关闭时 dispose
- 业务异常统一映射为 {"error", "details"} JSON 响应
- 运行：uvicorn app.main:app --app-dir backend
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.api.routes import cv_router, postulaciones_router, health_router
from app.core.errors import UsuariosError
from app.db.init_db import get_engine

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """创建（若未注入）并在关闭时释放数据库引擎"""
    owns_engine = getattr(app.state, "engine", None) is None
    if owns_engine:
        app.state.engine = get_engine()
        logger.info("Database engine created: %r", app.state.engine.url)
    try:
        yield
    finally:
        if owns_engine:
            app.state.engine.dispose()
            app.state.engine = None
            logger.info("Database engine disposed")


def _error_response(status_code: int, body: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body)


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """
    创建 FastAPI 应用

    Args:
        engine: 注入的数据库引擎（测试中使用内存 SQLite）；为 None 时在启动时按环境变量创建

    Returns:
        FastAPI 实例
    """
    app = FastAPI(
        title="Usuarios CV Service",
        version="0.1.0",
        description="CRUD sobre el esquema usuarios y sincronización transaccional del CV",
        lifespan=lifespan
    )
    app.state.engine = engine

    @app.exception_handler(UsuariosError)
    async def usuarios_error_handler(request: Request, exc: UsuariosError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s (%s)", request.method, request.url.path, exc.status_code, exc.message, exc.details)
        else:
            logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return _error_response(exc.status_code, exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # 请求体格式错误属于客户端输入错误，返回 400 而不是默认的 422
        details = [
            {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        logger.warning("%s %s -> 400: invalid payload", request.method, request.url.path)
        return _error_response(400, {"error": "Datos inválidos.", "details": details})

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error("%s %s -> 500: %s", request.method, request.url.path, exc)
        return _error_response(500, {"error": "Error interno del servidor.", "details": str(exc)})

    app.include_router(health_router)
    app.include_router(cv_router)
    app.include_router(postulaciones_router)

    return app


app = create_app()
