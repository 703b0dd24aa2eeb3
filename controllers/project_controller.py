from flask import Blueprint, request
from utils.request_helpers import json_body
from utils.response import json_response, created_response, list_response
from utils.exceptions import BizError
from services.project_service import ProjectService
from services.project_member_service import ProjectMemberService
from services.issue_service import IssueService


project_bp = Blueprint("project", __name__, url_prefix="/api/projects")


@project_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(code=e.code, message=e.message, data=e.data)


def _parse_bool(raw) -> bool:
    if raw is None:
        return False
    return str(raw).lower() in ("1", "true", "t", "yes")


@project_bp.post("")
def create_project():
    data = json_body()
    project = ProjectService.create_project(
        name=data.get("name"),
        description=data.get("description"),
        github_repo_url=data.get("github_repo_url"),
        github_owner=data.get("github_owner"),
        github_repo_name=data.get("github_repo_name"),
        created_by=data.get("created_by"),
    )
    return created_response(project.to_dict())


@project_bp.get("")
def list_projects():
    projects = ProjectService.get_projects()
    return list_response(projects)


# ---------------- 成员 ----------------

@project_bp.post("/<int:project_id>/members")
def invite_member(project_id: int):
    data = json_body()
    member = ProjectMemberService.invite_user(
        project_id=project_id,
        user_id=data.get("user_id"),
        role=data.get("role"),
    )
    return created_response(member.to_dict(), message="invited")


@project_bp.get("/<int:project_id>/members")
def list_members(project_id: int):
    with_user = _parse_bool(request.args.get("with_user"))
    members = ProjectMemberService.list_members(project_id, with_user=with_user)
    return json_response(data=[m.to_dict(user_basic=with_user) for m in members])


# ---------------- Issue ----------------

@project_bp.post("/<int:project_id>/issues")
def create_issue(project_id: int):
    data = json_body()
    issue = IssueService.create_issue(
        project_id=project_id,
        title=data.get("title"),
        description=data.get("description"),
        priority=data.get("priority"),
        status=data.get("status"),
        assigned_to=data.get("assigned_to"),
        created_by=data.get("created_by"),
        due_date=data.get("due_date"),
    )
    return created_response(issue.to_dict())


@project_bp.get("/<int:project_id>/issues")
def list_issues(project_id: int):
    args = request.args
    raw_assignee = args.get("assigned_to")
    assigned_to = args.get("assigned_to", type=int)
    if raw_assignee is not None and assigned_to is None:
        return json_response(code=400, message="assigned_to must be an integer")
    issues = IssueService.get_project_issues(
        project_id,
        status=args.get("status") or None,
        priority=args.get("priority") or None,
        assigned_to=assigned_to,
    )
    return list_response(issues)
