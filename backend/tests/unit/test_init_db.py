"""
数据库初始化单元测试
验证引擎配置、表结构创建和默认目录数据的生成
"""

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
from unittest.mock import patch

from app.db.init_db import (
    DEFAULT_AREAS, DEFAULT_LANGUAGES, DEFAULT_SKILLS,
    create_default_catalogs, create_default_data, create_tables,
    get_database_url, get_engine, init_db
)
from app.models import Area, Skill, Language, SkillAssignment


class TestDatabaseUrl:
    """测试连接 URL 解析"""

    def test_database_url_takes_precedence(self, monkeypatch):
        """测试 DATABASE_URL 优先于 DATABASE_PATH"""
        monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://app:secret@db:5432/bolsa")
        monkeypatch.setenv("DATABASE_PATH", "/tmp/ignored.db")

        assert get_database_url() == "postgresql+psycopg://app:secret@db:5432/bolsa"

    def test_absolute_sqlite_path(self, monkeypatch):
        """测试绝对路径的 SQLite 文件"""
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("DATABASE_PATH", "/var/data/usuarios.db")

        assert get_database_url() == "sqlite:////var/data/usuarios.db"

    def test_relative_path_resolved_against_project_root(self, monkeypatch):
        """测试相对路径从项目根目录解析"""
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("DATABASE_PATH", raising=False)

        url = get_database_url()

        assert url.startswith("sqlite:///")
        assert url.endswith("database.db")
        assert url[len("sqlite:///"):].startswith("/")


class TestEngine:
    """测试引擎配置"""

    def test_sqlite_foreign_keys_enabled(self, test_db_engine):
        """测试 SQLite 连接打开了外键检查"""
        with test_db_engine.connect() as connection:
            assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_dangling_foreign_key_rejected(self, test_db_session, test_profile):
        """测试引用不存在的技能会被数据库拒绝"""
        test_db_session.add(SkillAssignment(id_usuario=test_profile.id, id_habilidad=999999))

        with pytest.raises(IntegrityError):
            test_db_session.commit()


class TestDatabaseInit:
    """测试数据库初始化"""

    def test_create_tables(self, test_db_engine):
        """测试创建所有表"""
        table_names = set(inspect(test_db_engine).get_table_names())

        expected = {
            "areas", "habilidades", "idiomas", "usuarios",
            "experiencia_laboral", "educacion", "cursos",
            "usuarios_habilidades", "usuarios_idiomas",
            "postulaciones",
        }
        assert expected <= table_names

        # AUTOINCREMENT 表会生成 sqlite_sequence（inspect 不列出 sqlite_ 内部表）
        with test_db_engine.connect() as connection:
            sequence_table = connection.execute(
                text("SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'sqlite_sequence'")
            ).scalar()
        assert sequence_table == "sqlite_sequence"

    def test_create_default_catalogs(self, test_db_session):
        """测试创建默认目录"""
        create_default_catalogs(test_db_session)

        areas = test_db_session.exec(select(Area)).all()
        skills = test_db_session.exec(select(Skill)).all()
        languages = test_db_session.exec(select(Language)).all()

        assert {a.nombre for a in areas} == set(DEFAULT_AREAS)
        assert {s.nombre for s in skills} == set(DEFAULT_SKILLS)
        assert {l.nombre: l.codigo for l in languages} == DEFAULT_LANGUAGES

    def test_create_default_catalogs_is_idempotent(self, test_db_session):
        """测试重复调用不会产生重复条目"""
        create_default_catalogs(test_db_session)
        create_default_catalogs(test_db_session)

        skills = test_db_session.exec(select(Skill)).all()
        assert len(skills) == len(DEFAULT_SKILLS)

    def test_create_default_data(self, test_db_session):
        """测试创建所有默认数据"""
        create_default_data(test_db_session)

        assert len(test_db_session.exec(select(Language)).all()) == len(DEFAULT_LANGUAGES)

    def test_init_db_complete_flow(self, tmp_path):
        """测试完整的初始化流程"""
        # init_db 结束时会 dispose 引擎，因此使用临时文件数据库
        database_url = f"sqlite:///{tmp_path / 'usuarios.db'}"

        with patch("app.db.init_db.get_engine", return_value=get_engine(database_url)):
            init_db()

        engine = get_engine(database_url)
        create_tables(engine)
        with Session(engine) as session:
            assert len(session.exec(select(Area)).all()) == len(DEFAULT_AREAS)
            assert len(session.exec(select(Skill)).all()) == len(DEFAULT_SKILLS)
        engine.dispose()
