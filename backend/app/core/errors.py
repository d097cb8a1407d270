"""
错误分类

每种错误携带自己的 HTTP 状态码，API 层统一映射为
{"error": message, "details": details} 响应体。
调用方据此区分"需要先建档"、"提交内容有误"和"服务端故障"。
"""

from typing import Any, Optional


class UsuariosError(Exception):
    """服务内所有业务异常的基类"""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """转换为 JSON 响应体"""
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(UsuariosError):
    """路由参数或请求体格式错误，不访问数据库"""

    status_code = 400


class NotFoundError(UsuariosError):
    """请求的资源不存在"""

    status_code = 404


class ProfileNotFoundError(NotFoundError):
    """
    认证身份尚未建立 Profile

    这不是服务端故障：前端应提示用户先创建 Profile
    """

    def __init__(self, auth_id: int):
        super().__init__(
            "Perfil no encontrado. El usuario debe crear uno.",
            details={"id_userauth": auth_id}
        )
        self.auth_id = auth_id


class ConstraintViolationError(UsuariosError):
    """
    外键或检查约束失败（例如引用了不存在的 id_habilidad）

    整个事务已回滚；归因于提交内容，按客户端错误返回
    """

    status_code = 400

    def __init__(self, table: str, details: str):
        super().__init__(
            "Fallo la actualización completa del CV (transacción revertida).",
            details={"tabla": table, "mensaje": details}
        )
        self.table = table


class StoreError(UsuariosError):
    """连接丢失、序列重置失败或其他意外的驱动错误"""

    status_code = 500


class ExportError(UsuariosError):
    """CV 文档渲染失败；文档来自服务端，因此按服务端错误返回"""

    status_code = 500
