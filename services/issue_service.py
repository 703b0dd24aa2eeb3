import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError

from constants.issue import (
    DEFAULT_ISSUE_STATUS,
    validate_issue_fields,
    validate_priority,
    validate_status,
)
from models.issue import Issue
from repositories.issue_repository import IssueRepository
from repositories.project_repository import ProjectRepository
from utils import field_update
from utils.datetime_helpers import advance_past
from utils.exceptions import BizError, ForbiddenError, NotFoundError, ValidationError
from utils.permissions import (
    ASSIGNEE_NOT_MEMBER,
    ISSUE_NOT_FOUND,
    PROJECT_NOT_FOUND,
    assert_project_access,
    is_project_member_or_creator,
)
from utils.validators import is_blank, is_int, parse_datetime

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "priority", "status", "assigned_to", "due_date")
# 不允许置空的字段
REQUIRED_FIELDS = ("title", "priority", "status")


def _parse_due_date(value):
    try:
        return parse_datetime(value)
    except (TypeError, ValueError):
        raise ValidationError("due_date must be an ISO 8601 date or datetime")


def _validate_title(title):
    if not isinstance(title, str) or is_blank(title):
        raise ValidationError("Title is required")
    return title.strip()


def _validate_description(description):
    if description is not None and not isinstance(description, str):
        raise ValidationError("description must be a string")
    return description


def _validate_assignee(assigned_to):
    if assigned_to is not None and not is_int(assigned_to):
        raise ValidationError("assigned_to must be an integer")
    return assigned_to


class IssueService:

    @staticmethod
    def _ensure_assignee(project_id: int, assigned_to: Optional[int]):
        if assigned_to is None:
            return
        if not is_project_member_or_creator(project_id, assigned_to):
            logger.warning("assignee rejected: project=%s assignee=%s", project_id, assigned_to)
            raise ForbiddenError(ASSIGNEE_NOT_MEMBER)

    @staticmethod
    def create_issue(
        project_id: int,
        title: str,
        priority: str,
        created_by: int,
        description: Optional[str] = None,
        status: Optional[str] = None,
        assigned_to: Optional[int] = None,
        due_date=None,
    ) -> Issue:
        # 1. 入参校验（先于存在性与权限）
        if not is_int(project_id) or not is_int(created_by):
            raise ValidationError("project_id and created_by must be integers")
        title = _validate_title(title)
        description = _validate_description(description)
        status = status or DEFAULT_ISSUE_STATUS
        validate_issue_fields(priority=priority, status=status, skip_none=False)
        assigned_to = _validate_assignee(assigned_to)
        due_date = _parse_due_date(due_date)

        # 2. 项目存在性
        if not ProjectRepository.get_by_id(project_id):
            raise NotFoundError(PROJECT_NOT_FOUND)

        # 3. 创建人权限 & 指派人
        try:
            assert_project_access(project_id, created_by)
        except ForbiddenError:
            logger.warning("issue creation denied: project=%s user=%s", project_id, created_by)
            raise
        IssueService._ensure_assignee(project_id, assigned_to)

        # 4. 写入
        try:
            issue = IssueRepository.create(
                project_id=project_id,
                title=title,
                description=description,
                priority=priority,
                status=status,
                assigned_to=assigned_to,
                created_by=created_by,
                due_date=due_date,
            )
            IssueRepository.commit()
        except SQLAlchemyError:
            IssueRepository.rollback()
            logger.exception("create issue failed: project=%s", project_id)
            raise BizError("Database error", code=500)

        logger.info("issue created: id=%s project=%s", issue.id, project_id)
        return issue

    @staticmethod
    def _collect_changes(updates: Mapping[str, Any]) -> Dict[str, Any]:
        """三态更新 -> 需要写入的字段字典（仅包含出现的字段），同时完成校验。"""
        unknown = set(updates) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"unknown fields: {sorted(unknown)}")

        changes: Dict[str, Any] = {}
        for name in UPDATABLE_FIELDS:
            update = updates.get(name, field_update.UNCHANGED)
            if not field_update.is_present(update):
                continue
            if update is field_update.CLEARED and name in REQUIRED_FIELDS:
                raise ValidationError(f"{name} cannot be cleared")
            changes[name] = field_update.resolve(update)

        if "title" in changes:
            changes["title"] = _validate_title(changes["title"])
        if "description" in changes:
            _validate_description(changes["description"])
        if "priority" in changes:
            validate_priority(changes["priority"])
        if "status" in changes:
            validate_status(changes["status"])
        if "assigned_to" in changes:
            _validate_assignee(changes["assigned_to"])
        if "due_date" in changes:
            changes["due_date"] = _parse_due_date(changes["due_date"])
        return changes

    @staticmethod
    def update_issue(
        issue_id: int,
        updates: Mapping[str, Any],
        acting_user_id: Optional[int] = None,
    ) -> Issue:
        """
        部分更新 issue。
        :param updates: {字段: UNCHANGED | SetTo(v) | CLEARED}，未出现的字段视为 UNCHANGED
        :param acting_user_id: 传入时校验操作人的项目权限；不传则不校验操作人
        无论字段值是否实际变化，updated_at 都会严格前进。
        """
        changes = IssueService._collect_changes(updates)

        issue = IssueRepository.get_by_id(issue_id)
        if not issue:
            raise NotFoundError(ISSUE_NOT_FOUND)

        if acting_user_id is not None:
            assert_project_access(issue.project_id, acting_user_id)
        if changes.get("assigned_to") is not None:
            IssueService._ensure_assignee(issue.project_id, changes["assigned_to"])

        try:
            IssueRepository.apply_changes(issue, changes, updated_at=advance_past(issue.updated_at))
            IssueRepository.commit()
        except SQLAlchemyError:
            IssueRepository.rollback()
            logger.exception("update issue failed: id=%s", issue_id)
            raise BizError("Database error", code=500)

        logger.info("issue updated: id=%s fields=%s", issue.id, sorted(changes))
        return issue

    @staticmethod
    def get_issue(issue_id: int) -> Optional[Issue]:
        """不存在时返回 None，而不是抛错。"""
        return IssueRepository.get_by_id(issue_id)

    @staticmethod
    def get_project_issues(
        project_id: int,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        assigned_to: Optional[int] = None,
    ) -> List[Issue]:
        validate_issue_fields(priority=priority, status=status)
        _validate_assignee(assigned_to)
        return IssueRepository.list_by_project(
            project_id,
            status=status,
            priority=priority,
            assigned_to=assigned_to,
        )
