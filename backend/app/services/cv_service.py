"""
CV 服务层

封装 CV 同步事务，包括：
1. 身份锚定：id_userauth -> Profile ID（失败则不开启事务）
2. 按固定顺序整体替换五个子表集合：删除 -> 对齐序列 -> 插入
3. 全部成功才提交；任一步失败回滚整个事务，五个集合都不保留部分修改
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Type

from pydantic import BaseModel
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlmodel import Session

from app.core.errors import ConstraintViolationError, StoreError, UsuariosError
from app.models.base import ProfileChildBase
from app.models.cv import WorkExperience, Education, Course, SkillAssignment, LanguageAssignment
from app.repositories.cv_repository import CVRepository
from app.repositories.profile_repository import ProfileRepository
from app.repositories.sequence import reconcile_sequence
from app.schemas.cv import CVPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CVCollection:
    """载荷中的一个集合与其子表的对应关系"""
    field: str
    model: Type[ProfileChildBase]

    @property
    def table(self) -> str:
        return self.model.__tablename__

    def build_rows(self, profile_id: int, items: List[BaseModel]) -> List[ProfileChildBase]:
        return [self.model(id_usuario=profile_id, **item.model_dump()) for item in items]


# 固定处理顺序
CV_COLLECTIONS = (
    CVCollection("experienciaLaboral", WorkExperience),
    CVCollection("educacion", Education),
    CVCollection("cursos", Course),
    CVCollection("habilidades", SkillAssignment),
    CVCollection("idiomas", LanguageAssignment),
)


def _driver_message(exc: SQLAlchemyError) -> str:
    """取底层驱动的错误信息（如外键约束名），没有则用异常文本"""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class CVService:
    """
    CV 服务类

    核心职责：
    1. 读取聚合 CV 文档
    2. 在单个事务内同步（整体替换）五个 CV 集合

    会话由调用方（每个请求一个）持有并负责释放；本类只负责事务边界

    使用示例：
        with Session(engine) as session:
            profile_id = CVService(session).synchronize(auth_id=3, payload=payload)
    """

    def __init__(self, session: Session):
        """
        Args:
            session: 当前请求独占的数据库会话
        """
        self.session = session
        self.profiles = ProfileRepository(session)
        self.cv = CVRepository(session)

    def get_cv(self, auth_id: int) -> Dict[str, Any]:
        """获取聚合 CV 文档，Profile 不存在时抛出 ProfileNotFoundError"""
        return self.cv.fetch_aggregate(auth_id)

    def synchronize(self, auth_id: int, payload: CVPayload) -> int:
        """
        用载荷整体替换该用户的五个 CV 集合

        流程：
        1. 解析 Profile ID；不存在直接抛出 ProfileNotFoundError，不做任何写入
        2. 按固定顺序处理每个集合：
           a. 删除该 Profile 的全部现有行
           b. 对齐该表的自增计数器
           c. 插入载荷中的每一项并 flush
        3. 全部成功后提交

        Args:
            auth_id: 认证系统中的用户 ID
            payload: 完整的 CV 替换载荷

        Returns:
            Profile ID

        Raises:
            ProfileNotFoundError: 该身份尚未建立 Profile
            ConstraintViolationError: 外键/检查约束失败（已回滚）
            StoreError: 计数器对齐失败或其他数据库错误（已回滚）
        """
        profile_id = self.profiles.resolve(auth_id)

        current_table = None
        try:
            for collection in CV_COLLECTIONS:
                current_table = collection.table
                items = getattr(payload, collection.field)

                deleted = self.cv.delete_for_profile(collection.model, profile_id)
                reconcile_sequence(self.session, collection.table)
                self.cv.insert_rows(collection.build_rows(profile_id, items))

                logger.debug(
                    "CV sync %s: profile %s, deleted %s, inserted %s",
                    collection.table, profile_id, deleted, len(items)
                )

            self.session.commit()
        except (IntegrityError, DataError) as exc:
            self.session.rollback()
            logger.warning(
                "CV transaction rolled back for profile %s on %s: %s",
                profile_id, current_table, _driver_message(exc)
            )
            raise ConstraintViolationError(current_table, _driver_message(exc)) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("CV transaction failed for profile %s on %s: %s", profile_id, current_table, exc)
            raise StoreError(
                "Error interno al actualizar el CV (transacción revertida).",
                details=_driver_message(exc)
            ) from exc
        except UsuariosError:
            self.session.rollback()
            logger.error("CV transaction aborted for profile %s on %s", profile_id, current_table)
            raise
        except BaseException:
            # 包括请求被取消：连接归还前必须先回滚
            self.session.rollback()
            raise

        logger.info("CV synchronized for auth id %s (profile %s)", auth_id, profile_id)
        return profile_id
