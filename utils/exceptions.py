# utils/exceptions.py
from typing import Any, Optional
from werkzeug.exceptions import HTTPException


class BizError(HTTPException):
    code: int  # HTTP 状态码
    message: str  # 业务提示
    data: Optional[Any]  # 附加数据

    def __init__(self, message: str = "Business error", code: int = 400, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(description=message)


# 业务错误分类：调用方可按类型区分，HTTP 状态码随类型固定
class NotFoundError(BizError):
    def __init__(self, message: str = "Not found", data: Any = None):
        super().__init__(message, 404, data)


class ForbiddenError(BizError):
    def __init__(self, message: str = "Forbidden", data: Any = None):
        super().__init__(message, 403, data)


class ConflictError(BizError):
    def __init__(self, message: str = "Conflict", data: Any = None):
        super().__init__(message, 409, data)


class ValidationError(BizError):
    def __init__(self, message: str = "Invalid input", data: Any = None):
        super().__init__(message, 400, data)
