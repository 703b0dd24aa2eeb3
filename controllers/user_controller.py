# controllers/user_controller.py
from flask import Blueprint
from services.user_service import UserService
from services.project_service import ProjectService
from utils.request_helpers import json_body
from utils.response import json_response, created_response, list_response
from utils.exceptions import BizError

user_bp = Blueprint("users", __name__, url_prefix="/api/users")


@user_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(code=e.code, message=e.message, data=e.data)


@user_bp.post("")
def create_user():
    data = json_body()
    user = UserService.create_user(
        email=data.get("email"),
        name=data.get("name"),
        github_username=data.get("github_username"),
        avatar_url=data.get("avatar_url"),
    )
    return created_response(user.to_dict())


@user_bp.get("")
def list_users():
    users = UserService.get_users()
    return list_response(users)


@user_bp.get("/<int:user_id>/projects")
def list_user_projects(user_id: int):
    """用户创建的项目与参与的项目（去重）"""
    projects = ProjectService.get_user_projects(user_id)
    return list_response(projects)
