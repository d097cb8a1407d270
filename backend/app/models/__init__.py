"""
数据库模型模块
导出 usuarios 模式下的所有表模型和枚举类型
"""

# 目录域模型
from .catalog import Area, Skill, Language

# 用户画像域模型
from .profile import Profile

# CV 域模型
from .cv import WorkExperience, Education, Course, SkillAssignment, LanguageAssignment

# 求职申请
from .postulacion import JobApplication, ApplicationStatus

# 基础模型
from .base import CatalogBase, ProfileChildBase

# 定义导出的内容
__all__ = [
    # 目录域
    "Area", "Skill", "Language",
    # 用户画像域
    "Profile",
    # CV 域
    "WorkExperience", "Education", "Course",
    "SkillAssignment", "LanguageAssignment",
    # 求职申请
    "JobApplication", "ApplicationStatus",
    # 基础模型
    "CatalogBase", "ProfileChildBase"
]
