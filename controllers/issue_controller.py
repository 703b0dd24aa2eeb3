from flask import Blueprint
from utils.request_helpers import json_body
from utils.response import json_response, created_response, list_response
from utils.exceptions import BizError
from utils import field_update
from services.issue_service import IssueService, UPDATABLE_FIELDS
from services.comment_service import CommentService
from services.attachment_service import AttachmentService


issue_bp = Blueprint("issue", __name__, url_prefix="/api/issues")


@issue_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(code=e.code, message=e.message, data=e.data)


@issue_bp.get("/<int:issue_id>")
def get_issue(issue_id: int):
    issue = IssueService.get_issue(issue_id)
    # 不存在时返回 data=null，而不是 404
    if issue is None:
        return json_response(message="Issue not found", data=None)
    return json_response(data=issue.to_dict())


@issue_bp.patch("/<int:issue_id>")
def update_issue(issue_id: int):
    """
    请求体中：
      - 未出现的字段保持不变
      - 值为 null 的字段置空
      - 其他值覆盖
    acting_user_id 可选，传入时校验操作人的项目权限。
    """
    data = json_body()
    updates = field_update.from_payload(data, UPDATABLE_FIELDS)
    issue = IssueService.update_issue(
        issue_id,
        updates,
        acting_user_id=data.get("acting_user_id"),
    )
    return json_response(message="updated", data=issue.to_dict())


# ---------------- 评论 ----------------

@issue_bp.post("/<int:issue_id>/comments")
def create_comment(issue_id: int):
    data = json_body()
    comment = CommentService.create_comment(
        issue_id=issue_id,
        user_id=data.get("user_id"),
        content=data.get("content"),
    )
    return created_response(comment.to_dict())


@issue_bp.get("/<int:issue_id>/comments")
def list_comments(issue_id: int):
    comments = CommentService.get_issue_comments(issue_id)
    return list_response(comments)


# ---------------- 附件 ----------------

@issue_bp.post("/<int:issue_id>/attachments")
def create_attachment(issue_id: int):
    data = json_body()
    attachment = AttachmentService.create_attachment(
        issue_id=issue_id,
        filename=data.get("filename"),
        file_url=data.get("file_url"),
        file_size=data.get("file_size"),
        mime_type=data.get("mime_type"),
        uploaded_by=data.get("uploaded_by"),
    )
    return created_response(attachment.to_dict())


@issue_bp.get("/<int:issue_id>/attachments")
def list_attachments(issue_id: int):
    attachments = AttachmentService.get_issue_attachments(issue_id)
    return list_response(attachments)
