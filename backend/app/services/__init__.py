"""
服务层模块
提供业务逻辑的抽象层，封装复杂的服务流程
"""

from .cv_service import CVService, CV_COLLECTIONS
from .pdf_export import render_cv_pdf, cv_pdf_filename

__all__ = [
    "CVService",
    "CV_COLLECTIONS",
    "render_cv_pdf",
    "cv_pdf_filename"
]
