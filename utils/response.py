from flask import jsonify


def json_response(message="success", data=None, code=200):
    resp = jsonify({"code": code, "message": message, "data": data})
    resp.status_code = code
    return resp


def created_response(data, message="created"):
    return json_response(message=message, data=data, code=201)


def list_response(items):
    """列表接口统一序列化：items 为带 to_dict() 的实体列表"""
    return json_response(data=[item.to_dict() for item in items])
