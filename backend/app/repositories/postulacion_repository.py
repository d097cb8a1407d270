"""
求职申请 Repository
按认证身份列出一个 Profile 的全部职位申请
"""

from typing import Any, Dict

from sqlmodel import Session, select

from app.models.postulacion import JobApplication
from app.repositories.profile_repository import ProfileRepository


class PostulacionRepository:
    """
    求职申请数据访问对象
    封装 postulaciones 表的只读查询
    """

    def __init__(self, session: Session):
        """
        初始化 Repository

        Args:
            session: SQLModel 数据库会话
        """
        self.session = session

    def list_for_auth_id(self, auth_id: int) -> Dict[str, Any]:
        """
        获取用户的全部申请，最新的在前

        尚未建档或没有任何申请时返回 {"postulaciones": []}，不视为错误

        Args:
            auth_id: 认证系统中的用户 ID

        Returns:
            {"id_usuario": 7, "postulaciones": [...]} 或 {"postulaciones": []}
        """
        profile = ProfileRepository(self.session).get_by_auth_id(auth_id)
        if profile is None:
            return {"postulaciones": []}

        statement = (
            select(JobApplication)
            .where(JobApplication.id_usuario == profile.id)
            .order_by(JobApplication.fecha_postulacion.desc(), JobApplication.id.desc())
        )
        applications = self.session.exec(statement).all()
        if not applications:
            return {"postulaciones": []}

        return {
            "id_usuario": profile.id,
            "postulaciones": [application.model_dump(mode="json") for application in applications],
        }
