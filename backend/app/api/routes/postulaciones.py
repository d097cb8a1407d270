"""
求职申请路由

- GET /usuarios/{authId}/postulaciones
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.deps import get_session, parse_auth_id
from app.repositories.postulacion_repository import PostulacionRepository

router = APIRouter(prefix="/usuarios", tags=["postulaciones"])


@router.get("/{authId}/postulaciones")
def obtener_postulaciones(
    auth_id: int = Depends(parse_auth_id),
    session: Session = Depends(get_session),
) -> Dict[str, Any]:
    """列出用户的全部职位申请；没有时返回 {"postulaciones": []}"""
    return PostulacionRepository(session).list_for_auth_id(auth_id)
