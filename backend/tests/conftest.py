"""
Pytest 测试配置
提供测试数据库、示例目录/Profile 数据和 API 客户端等测试基础设施
"""

import sys
from pathlib import Path
from typing import Generator

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, select

# 添加项目根目录到 sys.path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.db.init_db import get_engine, create_tables, create_default_catalogs
from app.models import (
    Area, Skill, Language,
    Profile,
    WorkExperience,
    JobApplication, ApplicationStatus
)


# ==================== 数据库 Fixtures ====================

@pytest.fixture(scope="function")
def test_db_engine():
    """
    创建测试用的内存数据库引擎
    每个测试函数都会获得一个全新的数据库

    StaticPool 让所有线程共享同一个内存连接（TestClient 在线程池中执行路由）；
    get_engine 会为 SQLite 打开外键检查
    """
    engine = get_engine("sqlite://", poolclass=StaticPool)

    # 创建所有表
    create_tables(engine)

    yield engine

    # 测试结束后自动清理（内存数据库自动销毁）
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine) -> Generator[Session, None, None]:
    """
    创建测试用的数据库会话
    """
    with Session(test_db_engine) as session:
        yield session


# ==================== 测试数据 Fixtures ====================

@pytest.fixture(scope="function")
def catalogs(test_db_session: Session) -> dict:
    """
    写入默认目录（区域、技能、语言），返回 名称 -> ID 映射
    """
    create_default_catalogs(test_db_session)

    def ids(model):
        return {row.nombre: row.id for row in test_db_session.exec(select(model)).all()}

    return {
        "areas": ids(Area),
        "habilidades": ids(Skill),
        "idiomas": ids(Language),
    }


@pytest.fixture(scope="function")
def test_profile(test_db_session: Session, catalogs: dict) -> Profile:
    """
    创建测试 Profile（认证 ID = 3）
    """
    profile = Profile(
        id_userauth=3,
        salario=25000.0,
        id_area=catalogs["areas"]["Tecnologías de la información"],
        codigo_postal="37600",
        estado="Guanajuato",
        municipio="San Felipe",
        colonia="Centro"
    )
    test_db_session.add(profile)
    test_db_session.commit()
    test_db_session.refresh(profile)
    return profile


@pytest.fixture(scope="function")
def other_profile(test_db_session: Session, catalogs: dict) -> Profile:
    """
    另一个用户的 Profile（认证 ID = 8），用于验证同步只影响自己的行
    """
    profile = Profile(id_userauth=8, salario=18000.0)
    test_db_session.add(profile)
    test_db_session.commit()
    test_db_session.refresh(profile)
    return profile


@pytest.fixture(scope="function")
def existing_experience(test_db_session: Session, test_profile: Profile) -> list[WorkExperience]:
    """
    测试 Profile 已有的工作经历（同步前的状态）
    """
    rows = [
        WorkExperience(id_usuario=test_profile.id, empresa="Bimbo", cargo="Analista", descripcion="Reportes"),
        WorkExperience(id_usuario=test_profile.id, empresa="Pemex", cargo="Becario", descripcion=None),
    ]
    for row in rows:
        test_db_session.add(row)
    test_db_session.commit()
    for row in rows:
        test_db_session.refresh(row)
    return rows


@pytest.fixture(scope="function")
def full_payload(catalogs: dict) -> dict:
    """
    覆盖五个集合的完整 CV 载荷
    """
    return {
        "experienciaLaboral": [
            {"empresa": "Acme", "cargo": "Dev", "descripcion": "x"},
            {"empresa": "Globex", "cargo": "Tech Lead", "descripcion": "Equipo de 5"},
        ],
        "educacion": [
            {
                "universidad": "Universidad de Guanajuato",
                "carrera": "Ingeniería en Sistemas",
                "fecha_inicio": "2015-08-01",
                "fecha_fin": "2019-06-30",
            }
        ],
        "cursos": [
            {"nombre_curso": "SQL avanzado", "descripcion": "Índices y planes", "curso": "https://example.com/sql"},
        ],
        "habilidades": [
            {"id_habilidad": catalogs["habilidades"]["Python"]},
            {"id_habilidad": catalogs["habilidades"]["SQL"]},
        ],
        "idiomas": [
            {"id_idioma": catalogs["idiomas"]["Inglés"]},
        ],
    }


@pytest.fixture(scope="function")
def test_applications(test_db_session: Session, test_profile: Profile) -> list[JobApplication]:
    """
    创建测试职位申请
    """
    from datetime import datetime, timezone

    applications = [
        JobApplication(
            id_usuario=test_profile.id,
            puesto="Desarrollador Backend",
            empresa="Acme",
            estatus=ApplicationStatus.ENTREVISTA,
            fecha_postulacion=datetime(2024, 3, 1, tzinfo=timezone.utc)
        ),
        JobApplication(
            id_usuario=test_profile.id,
            puesto="Analista de datos",
            empresa="Globex",
            fecha_postulacion=datetime(2024, 5, 20, tzinfo=timezone.utc)
        ),
    ]
    for application in applications:
        test_db_session.add(application)
    test_db_session.commit()
    for application in applications:
        test_db_session.refresh(application)
    return applications


# ==================== Repository / Service Fixtures ====================

@pytest.fixture(scope="function")
def profile_repository(test_db_session: Session):
    """
    创建 ProfileRepository 实例
    """
    from app.repositories.profile_repository import ProfileRepository
    return ProfileRepository(test_db_session)


@pytest.fixture(scope="function")
def cv_repository(test_db_session: Session):
    """
    创建 CVRepository 实例
    """
    from app.repositories.cv_repository import CVRepository
    return CVRepository(test_db_session)


@pytest.fixture(scope="function")
def cv_service(test_db_session: Session):
    """
    创建 CVService 实例
    """
    from app.services.cv_service import CVService
    return CVService(test_db_session)


# ==================== API Fixtures ====================

@pytest.fixture(scope="function")
def client(test_db_engine):
    """
    使用内存数据库引擎的 API 测试客户端
    每个请求仍然通过 get_session 获得独立会话
    """
    from fastapi.testclient import TestClient
    from app.main import create_app

    app = create_app(engine=test_db_engine)
    with TestClient(app) as test_client:
        yield test_client


# ==================== Pytest 配置 ====================

def pytest_configure(config):
    """
    Pytest 初始化配置
    """
    # 标记测试分类
    config.addinivalue_line(
        "markers", "unit: Unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests"
    )
