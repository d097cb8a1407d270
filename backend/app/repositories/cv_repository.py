"""
CV Repository
读取一个 Profile 的完整 CV 聚合文档，并提供同步事务使用的整表替换操作
"""

from typing import Any, Dict, List, Sequence, Type

from sqlalchemy import delete
from sqlmodel import Session, SQLModel, select

from app.models.catalog import Skill, Language
from app.models.cv import WorkExperience, Education, Course, SkillAssignment, LanguageAssignment
from app.models.base import ProfileChildBase
from app.repositories.profile_repository import ProfileRepository


class CVRepository:
    """
    CV 数据访问对象
    封装五张 CV 子表（experiencia_laboral / educacion / cursos /
    usuarios_habilidades / usuarios_idiomas）的读写
    """

    def __init__(self, session: Session):
        """
        初始化 Repository

        Args:
            session: SQLModel 数据库会话
        """
        self.session = session

    # ==================== 读取：聚合文档 ====================

    def fetch_aggregate(self, auth_id: int) -> Dict[str, Any]:
        """
        获取用户的完整 CV，组装为与写入载荷同名字段的字典

        聚合文档是纯派生视图：每次读取都从五张子表重新计算

        Args:
            auth_id: 认证系统中的用户 ID

        Returns:
            字典，例如:
            {"id_usuario": 7, "experienciaLaboral": [...], "educacion": [...],
             "cursos": [...], "habilidades": [...], "idiomas": [...]}

        Raises:
            ProfileNotFoundError: 该身份尚未建立 Profile
        """
        profile_id = ProfileRepository(self.session).resolve(auth_id)

        return {
            "id_usuario": profile_id,
            "experienciaLaboral": self.get_work_experience(profile_id),
            "educacion": self.get_education(profile_id),
            "cursos": self.get_courses(profile_id),
            "habilidades": self.get_skills(profile_id),
            "idiomas": self.get_languages(profile_id),
        }

    def get_work_experience(self, profile_id: int) -> List[Dict[str, Any]]:
        """工作经历，最新的在前"""
        statement = (
            select(WorkExperience)
            .where(WorkExperience.id_usuario == profile_id)
            .order_by(WorkExperience.id.desc())
        )
        return _dump_rows(self.session.exec(statement).all())

    def get_education(self, profile_id: int) -> List[Dict[str, Any]]:
        """教育经历，按结束日期倒序"""
        statement = (
            select(Education)
            .where(Education.id_usuario == profile_id)
            .order_by(Education.fecha_fin.desc(), Education.id.desc())
        )
        return _dump_rows(self.session.exec(statement).all())

    def get_courses(self, profile_id: int) -> List[Dict[str, Any]]:
        """课程，最新的在前"""
        statement = (
            select(Course)
            .where(Course.id_usuario == profile_id)
            .order_by(Course.id.desc())
        )
        return _dump_rows(self.session.exec(statement).all())

    def get_skills(self, profile_id: int) -> List[Dict[str, Any]]:
        """技能关联行，附带目录中的技能名称"""
        statement = (
            select(SkillAssignment, Skill.nombre)
            .join(Skill, Skill.id == SkillAssignment.id_habilidad)
            .where(SkillAssignment.id_usuario == profile_id)
            .order_by(SkillAssignment.id_habilidad)
        )
        return [
            {**assignment.model_dump(mode="json"), "nombre": nombre}
            for assignment, nombre in self.session.exec(statement).all()
        ]

    def get_languages(self, profile_id: int) -> List[Dict[str, Any]]:
        """语言关联行，附带目录中的语言名称"""
        statement = (
            select(LanguageAssignment, Language.nombre)
            .join(Language, Language.id == LanguageAssignment.id_idioma)
            .where(LanguageAssignment.id_usuario == profile_id)
            .order_by(LanguageAssignment.id_idioma)
        )
        return [
            {**assignment.model_dump(mode="json"), "nombre": nombre}
            for assignment, nombre in self.session.exec(statement).all()
        ]

    # ==================== 写入：整表替换（不提交） ====================

    def delete_for_profile(self, model: Type[ProfileChildBase], profile_id: int) -> int:
        """
        删除某张子表中属于该 Profile 的全部行

        在调用方的事务内执行，不提交

        Returns:
            删除的行数
        """
        # fetch：把被删除的行从 identity map 中移除，重新插入时可以复用相同的 id
        statement = (
            delete(model)
            .where(model.id_usuario == profile_id)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.exec(statement)
        return result.rowcount

    def insert_rows(self, rows: Sequence[SQLModel]) -> None:
        """
        顺序插入一批行并立即 flush，使约束错误在当前集合内暴露

        同一个会话不支持并发语句，因此逐行 add 后统一 flush
        """
        for row in rows:
            self.session.add(row)
        self.session.flush()


def _dump_rows(rows: Sequence[SQLModel]) -> List[Dict[str, Any]]:
    """将模型列表转换为 JSON 友好的字典列表（日期转为 ISO 字符串）"""
    return [row.model_dump(mode="json") for row in rows]
