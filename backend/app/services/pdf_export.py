"""
CV PDF 导出

将聚合 CV 文档渲染为 PDF 二进制。纯函数，不访问数据库；
文档由服务端生成，任何渲染失败都按服务端错误 (ExportError) 处理。
"""

import html
import logging
from io import BytesIO
from typing import Any, Callable, Dict, List, Optional

from reportlab.lib.enums import TA_LEFT
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from app.core.errors import ExportError

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    """转义 HTML 实体，避免 reportlab 解析 Paragraph 标记出错"""
    if value is None:
        return ""
    return html.escape(str(value))


def _period(start: Optional[str], end: Optional[str]) -> str:
    if not start and not end:
        return ""
    return f"{_text(start) or '?'} – {_text(end) or 'Actual'}"


def _experience_lines(entry: Dict[str, Any]) -> List[str]:
    lines = [f"<b>{_text(entry['cargo'])}</b> · {_text(entry['empresa'])}"]
    if entry.get("descripcion"):
        lines.append(_text(entry["descripcion"]))
    return lines


def _education_lines(entry: Dict[str, Any]) -> List[str]:
    lines = [f"<b>{_text(entry['carrera'])}</b> · {_text(entry['universidad'])}"]
    period = _period(entry.get("fecha_inicio"), entry.get("fecha_fin"))
    if period:
        lines.append(period)
    return lines


def _course_lines(entry: Dict[str, Any]) -> List[str]:
    lines = [f"<b>{_text(entry['nombre_curso'])}</b>"]
    if entry.get("descripcion"):
        lines.append(_text(entry["descripcion"]))
    if entry.get("curso"):
        lines.append(f"<i>{_text(entry['curso'])}</i>")
    return lines


def _catalog_lines(id_field: str) -> Callable[[Dict[str, Any]], List[str]]:
    def lines(entry: Dict[str, Any]) -> List[str]:
        return [_text(entry.get("nombre") or f"#{entry[id_field]}")]
    return lines


# (文档字段, 标题, 条目渲染函数)
SECTIONS = (
    ("experienciaLaboral", "Experiencia laboral", _experience_lines),
    ("educacion", "Educación", _education_lines),
    ("cursos", "Cursos", _course_lines),
    ("habilidades", "Habilidades", _catalog_lines("id_habilidad")),
    ("idiomas", "Idiomas", _catalog_lines("id_idioma")),
)


def cv_pdf_filename(document: Dict[str, Any]) -> str:
    """下载文件名，例如 cv_7.pdf"""
    return f"cv_{document.get('id_usuario', 'usuario')}.pdf"


def render_cv_pdf(document: Dict[str, Any]) -> bytes:
    """
    渲染聚合 CV 文档为 PDF

    Args:
        document: CVRepository.fetch_aggregate 返回的聚合文档

    Returns:
        PDF 二进制内容

    Raises:
        ExportError: 文档结构不正确或 reportlab 渲染失败
    """
    buffer = BytesIO()
    try:
        doc = SimpleDocTemplate(
            buffer,
            pagesize=LETTER,
            topMargin=0.75*inch,
            bottomMargin=0.75*inch,
            leftMargin=0.9*inch,
            rightMargin=0.9*inch,
            title="Curriculum Vitae"
        )

        styles = getSampleStyleSheet()
        body_style = ParagraphStyle(
            "CVBody",
            parent=styles["Normal"],
            fontSize=10.5,
            leading=14,
            alignment=TA_LEFT,
            spaceAfter=2
        )

        story = [
            Paragraph("Curriculum Vitae", styles["Title"]),
            Paragraph(f"Perfil #{_text(document['id_usuario'])}", styles["Normal"]),
            Spacer(1, 12),
        ]

        for field, heading, render_entry in SECTIONS:
            entries = document[field]
            if not isinstance(entries, list):
                raise TypeError(f"'{field}' must be a list, got {type(entries).__name__}")
            if not entries:
                continue

            story.append(Paragraph(heading, styles["Heading2"]))
            for entry in entries:
                for line in render_entry(entry):
                    story.append(Paragraph(line, body_style))
                story.append(Spacer(1, 6))

        doc.build(story)
    except Exception as e:
        logger.error("CV PDF rendering failed: %s", e)
        raise ExportError("Error al generar el PDF del CV.", details=str(e)) from e

    pdf_bytes = buffer.getvalue()
    logger.info("Rendered CV PDF for profile %s (%s bytes)", document.get("id_usuario"), len(pdf_bytes))
    return pdf_bytes
