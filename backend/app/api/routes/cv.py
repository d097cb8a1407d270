"""
CV 路由

- GET  /usuarios/{authId}/cv      读取聚合 CV
- PUT  /usuarios/{authId}/cv      同步（整体替换）CV
- GET  /usuarios/{authId}/cv/pdf  导出 PDF
"""

import logging
from io import BytesIO
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlmodel import Session

from app.api.deps import get_session, parse_auth_id
from app.schemas.cv import CVPayload, CVUpdateResponse
from app.services.cv_service import CVService
from app.services.pdf_export import cv_pdf_filename, render_cv_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/usuarios", tags=["cv"])


@router.get("/{authId}/cv")
def obtener_cv_completo(
    auth_id: int = Depends(parse_auth_id),
    session: Session = Depends(get_session),
) -> Dict[str, Any]:
    """获取用户的完整 CV（五个集合）"""
    return CVService(session).get_cv(auth_id)


@router.put("/{authId}/cv", response_model=CVUpdateResponse)
def actualizar_cv_completo(
    payload: CVPayload,
    auth_id: int = Depends(parse_auth_id),
    session: Session = Depends(get_session),
) -> CVUpdateResponse:
    """
    用请求体整体替换用户的 CV

    任何一个集合失败都会回滚全部五个集合
    """
    profile_id = CVService(session).synchronize(auth_id, payload)
    return CVUpdateResponse(id_usuario=profile_id)


@router.get("/{authId}/cv/pdf")
def exportar_cv_pdf(
    auth_id: int = Depends(parse_auth_id),
    session: Session = Depends(get_session),
) -> StreamingResponse:
    """导出 CV 为 PDF 下载"""
    document = CVService(session).get_cv(auth_id)
    pdf_bytes = render_cv_pdf(document)

    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{cv_pdf_filename(document)}"'
        }
    )
