"""
Profile Repository
提供 usuarios 表的查询，以及"认证身份 -> 内部 Profile ID"的解析
"""

from typing import Optional

from sqlmodel import Session, select

from app.core.errors import ProfileNotFoundError
from app.models.profile import Profile


class ProfileRepository:
    """
    Profile 数据访问对象
    封装所有与 usuarios 表相关的数据库操作
    """

    def __init__(self, session: Session):
        """
        初始化 Repository

        Args:
            session: SQLModel 数据库会话
        """
        self.session = session

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        """
        根据内部 ID 获取 Profile

        Args:
            profile_id: Profile ID

        Returns:
            Profile 对象，不存在则返回 None
        """
        return self.session.get(Profile, profile_id)

    def get_by_auth_id(self, auth_id: int) -> Optional[Profile]:
        """
        根据认证身份获取 Profile

        Args:
            auth_id: 认证系统中的用户 ID

        Returns:
            Profile 对象，不存在则返回 None
        """
        statement = select(Profile).where(Profile.id_userauth == auth_id)
        return self.session.exec(statement).first()

    def resolve(self, auth_id: int) -> int:
        """
        身份锚定：外部认证 ID -> 内部 Profile ID

        CV 子表全部以 Profile ID 作为外键；id_userauth 唯一，因此最多匹配一行

        Args:
            auth_id: 认证系统中的用户 ID（正整数）

        Returns:
            Profile ID

        Raises:
            ProfileNotFoundError: 该身份尚未建立 Profile
        """
        statement = select(Profile.id).where(Profile.id_userauth == auth_id)
        profile_id = self.session.exec(statement).first()
        if profile_id is None:
            raise ProfileNotFoundError(auth_id)
        return profile_id

    def create(
        self,
        auth_id: int,
        salario: Optional[float] = None,
        id_area: Optional[int] = None,
        codigo_postal: Optional[str] = None,
        estado: Optional[str] = None,
        municipio: Optional[str] = None,
        colonia: Optional[str] = None
    ) -> Profile:
        """
        创建新的 Profile

        Args:
            auth_id: 认证系统中的用户 ID（必须唯一）
            salario: 期望薪资
            id_area: 职业区域 ID
            codigo_postal / estado / municipio / colonia: 地址字段

        Returns:
            创建的 Profile 对象
        """
        profile = Profile(
            id_userauth=auth_id,
            salario=salario,
            id_area=id_area,
            codigo_postal=codigo_postal,
            estado=estado,
            municipio=municipio,
            colonia=colonia
        )
        self.session.add(profile)
        self.session.commit()
        self.session.refresh(profile)
        return profile
