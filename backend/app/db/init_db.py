"""
数据库初始化脚本
负责创建数据库引擎（连接池）、表结构和目录初始数据
"""

import os
from pathlib import Path
from typing import Dict, List, Optional

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine, select

from app.models.catalog import Area, Skill, Language
# 导入全部模型，确保 create_all 能看到所有表
from app.models import (  # noqa: F401
    Profile,
    WorkExperience, Education, Course,
    SkillAssignment, LanguageAssignment,
    JobApplication,
)


# 默认目录数据：首次初始化时写入
DEFAULT_AREAS: List[str] = [
    "Tecnologías de la información",
    "Administración",
    "Ventas",
    "Manufactura",
    "Salud",
]

DEFAULT_SKILLS: List[str] = [
    "Python",
    "JavaScript",
    "SQL",
    "Excel",
    "Atención al cliente",
    "Trabajo en equipo",
]

DEFAULT_LANGUAGES: Dict[str, str] = {
    "Español": "es",
    "Inglés": "en",
    "Francés": "fr",
    "Alemán": "de",
}


def get_database_url() -> str:
    """
    获取数据库连接 URL
    优先使用 DATABASE_URL（如 PostgreSQL），否则使用默认的 SQLite 文件
    """
    database_url = os.environ.get("DATABASE_URL")
    if database_url:
        return database_url

    db_path = os.environ.get("DATABASE_PATH", "database.db")
    # 确保路径是绝对路径
    if not os.path.isabs(db_path):
        # 从项目根目录解析
        project_root = Path(__file__).parent.parent.parent
        db_path = str(project_root / db_path)
    return f"sqlite:///{db_path}"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite 默认不检查外键，每个新连接都需要打开"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(database_url: Optional[str] = None, **engine_kwargs) -> Engine:
    """
    创建并返回数据库引擎

    引擎内部持有连接池，进程启动时创建一次，关闭时 dispose

    Args:
        database_url: 连接 URL，为 None 时从环境变量解析
        **engine_kwargs: 透传给 create_engine 的额外参数（测试中用于 StaticPool）

    Returns:
        SQLAlchemy Engine
    """
    if database_url is None:
        database_url = get_database_url()

    is_sqlite = database_url.startswith("sqlite")
    options = {
        # 设置 DB_ECHO=true 可查看 SQL 语句
        "echo": os.environ.get("DB_ECHO", "false").lower() == "true",
    }
    if is_sqlite:
        # SQLite 特有配置：FastAPI 在线程池中执行路由
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = int(os.environ.get("DB_POOL_SIZE", "5"))
        options["max_overflow"] = int(os.environ.get("DB_MAX_OVERFLOW", "10"))
        # 取出连接前先探测，避免拿到已断开的连接
        options["pool_pre_ping"] = True
    options.update(engine_kwargs)

    engine = create_engine(database_url, **options)

    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def create_tables(engine) -> None:
    """
    创建所有数据库表
    SQLModel 会自动根据模型创建表结构
    """
    SQLModel.metadata.create_all(engine)
    print(f"Database tables created successfully at {engine.url!r}")


def _ensure_catalog(session: Session, model, names) -> int:
    """按名称补齐目录表，已存在的跳过，返回新建数量"""
    existing = set(session.exec(select(model.nombre)).all())
    created_count = 0
    for name in names:
        if name in existing:
            continue
        if isinstance(names, dict):
            session.add(model(nombre=name, codigo=names[name]))
        else:
            session.add(model(nombre=name))
        created_count += 1
    return created_count


def create_default_catalogs(session: Session) -> None:
    """
    创建默认目录数据（区域、技能、语言）
    如果条目已存在，则跳过
    """
    created_count = 0
    created_count += _ensure_catalog(session, Area, DEFAULT_AREAS)
    created_count += _ensure_catalog(session, Skill, DEFAULT_SKILLS)
    created_count += _ensure_catalog(session, Language, DEFAULT_LANGUAGES)

    if created_count > 0:
        session.commit()
        print(f"Created {created_count} default catalog entries")
    else:
        print("Catalog entries already exist")


def create_default_data(session: Session) -> None:
    """
    创建所有默认数据
    Profile 由单独的建档流程创建，这里只准备目录
    """
    print("\n=== Creating default data ===")

    create_default_catalogs(session)

    print("=== Default data creation completed ===\n")


def init_db() -> None:
    """
    完整的数据库初始化流程
    1. 创建数据库引擎
    2. 创建所有表结构
    3. 创建默认数据
    """
    print("\n=== Initializing database ===")

    # 创建引擎
    engine = get_engine()

    # 创建表结构
    create_tables(engine)

    # 创建默认数据
    with Session(engine) as session:
        create_default_data(session)

    engine.dispose()
    print("=== Database initialization completed ===\n")


if __name__ == "__main__":
    # 直接运行此脚本时，执行数据库初始化
    init_db()
