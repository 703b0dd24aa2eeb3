from flask import request

from utils.exceptions import ValidationError


def json_body() -> dict:
    """
    读取请求体 JSON。
    缺失或无法解析时返回空 dict（由服务层报缺字段）；解析出来但不是对象时直接 400。
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
