"""
API 数据模型模块
定义请求体与响应体的结构
"""

from .cv import (
    WorkExperienceIn,
    EducationIn,
    CourseIn,
    SkillIn,
    LanguageIn,
    CVPayload,
    CVUpdateResponse,
)

__all__ = [
    "WorkExperienceIn",
    "EducationIn",
    "CourseIn",
    "SkillIn",
    "LanguageIn",
    "CVPayload",
    "CVUpdateResponse",
]
