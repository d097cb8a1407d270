"""
CV 写入载荷模型

字段名与数据库列名一致，同步事务可以直接 model_dump() 后构造子表行
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

# 所有 id 列都是 32 位 INTEGER / SERIAL
MAX_ID = 2**31 - 1


class WorkExperienceIn(BaseModel):
    """工作经历条目"""
    empresa: str = Field(..., min_length=1, description="公司名称")
    cargo: str = Field(..., min_length=1, description="职位")
    descripcion: Optional[str] = Field(default=None, description="工作内容描述")


class EducationIn(BaseModel):
    """教育经历条目，日期格式 YYYY-MM-DD"""
    universidad: str = Field(..., min_length=1)
    carrera: str = Field(..., min_length=1)
    fecha_inicio: Optional[date] = None
    fecha_fin: Optional[date] = Field(default=None, description="为空表示仍在就读")

    @model_validator(mode="after")
    def check_date_order(self) -> "EducationIn":
        """结束日期不能早于开始日期"""
        if self.fecha_inicio and self.fecha_fin and self.fecha_fin < self.fecha_inicio:
            raise ValueError("fecha_fin no puede ser anterior a fecha_inicio")
        return self


class CourseIn(BaseModel):
    """课程条目"""
    nombre_curso: str = Field(..., min_length=1)
    descripcion: Optional[str] = None
    curso: Optional[str] = Field(default=None, description="课程链接")


class SkillIn(BaseModel):
    """技能引用，只携带目录 ID"""
    id_habilidad: int = Field(..., gt=0, le=MAX_ID)


class LanguageIn(BaseModel):
    """语言引用，只携带目录 ID"""
    id_idioma: int = Field(..., gt=0, le=MAX_ID)


class CVPayload(BaseModel):
    """
    完整的 CV 替换载荷

    五个集合均可省略或为 null，此时按空列表处理：
    写入是整体替换，省略某个集合等于清空它
    """
    experienciaLaboral: List[WorkExperienceIn] = Field(default_factory=list)
    educacion: List[EducationIn] = Field(default_factory=list)
    cursos: List[CourseIn] = Field(default_factory=list)
    habilidades: List[SkillIn] = Field(default_factory=list)
    idiomas: List[LanguageIn] = Field(default_factory=list)

    @field_validator("experienciaLaboral", "educacion", "cursos", "habilidades", "idiomas", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value


class CVUpdateResponse(BaseModel):
    """PUT /usuarios/{authId}/cv 的成功响应"""
    message: str = "CV actualizado exitosamente."
    id_usuario: int
