# extensions/logger.py
"""
应用日志：
  - stdout 始终输出；LOG_TO_FILE 打开时额外写 app.log / error.log（按大小滚动）
  - LOG_JSON=1 输出单行 JSON，便于日志平台采集
  - 每个请求带 request_id（优先透传 X-Request-Id），并回写到响应头
"""
import json
import logging
import os
import sys
import time
import uuid
from logging.handlers import RotatingFileHandler

from flask import g, has_request_context, request
from werkzeug.exceptions import HTTPException

from utils.response import json_response

_REQUEST_ID_KEY = "request_id"
_HANDLER_MARK = "_issue_tracker_handler"
REQUEST_ID_HEADER = "X-Request-Id"

# 业务日志里通过 extra= 传入的上下文字段
_CONTEXT_FIELDS = ("project_id", "issue_id", "user_id", "duration_ms", "status")


class JsonFormatter(logging.Formatter):
    def __init__(self, app_name: str = "issue-tracker"):
        super().__init__()
        self.app_name = app_name

    def format(self, record):
        data = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "app": self.app_name,
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", "-"),
            "msg": record.getMessage(),
        }
        for key in _CONTEXT_FIELDS:
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False, default=str)


class RequestIdFilter(logging.Filter):
    def filter(self, record):
        record.request_id = getattr(g, _REQUEST_ID_KEY, "-") if has_request_context() else "-"
        return True


def current_request_id() -> str:
    if not has_request_context():
        return "-"
    if not hasattr(g, _REQUEST_ID_KEY):
        # 允许上游网关透传请求 ID
        setattr(g, _REQUEST_ID_KEY, request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex)
    return getattr(g, _REQUEST_ID_KEY)


def _build_formatter(cfg):
    if cfg["LOG_JSON"]:
        return JsonFormatter(cfg.get("APP_NAME", "issue-tracker"))
    return logging.Formatter(
        "%(asctime)s | %(levelname)s | %(request_id)s | %(name)s | %(message)s",
        "%Y-%m-%d %H:%M:%S",
    )


def _install_handlers(app):
    cfg = app.config
    level = getattr(logging, cfg["LOG_LEVEL"].upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    # create_app 可能被调用多次（测试），处理器只装一次
    if any(getattr(h, _HANDLER_MARK, False) for h in root.handlers):
        return

    formatter = _build_formatter(cfg)

    def mark(handler, handler_level=None):
        handler.setLevel(handler_level or level)
        handler.setFormatter(formatter)
        handler.addFilter(RequestIdFilter())
        setattr(handler, _HANDLER_MARK, True)
        root.addHandler(handler)

    mark(logging.StreamHandler(sys.stdout))

    if cfg["LOG_TO_FILE"]:
        os.makedirs(cfg["LOG_DIR"], exist_ok=True)
        for filename, handler_level in (("app.log", None), ("error.log", logging.ERROR)):
            mark(
                RotatingFileHandler(
                    os.path.join(cfg["LOG_DIR"], filename),
                    maxBytes=cfg["LOG_MAX_BYTES"],
                    backupCount=cfg["LOG_BACKUP_COUNT"],
                    encoding="utf-8",
                ),
                handler_level,
            )

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.INFO)


def init_logger(app):
    _install_handlers(app)
    access_log = logging.getLogger("issue_tracker.access")

    @app.before_request
    def _start_request():
        g._req_start = time.perf_counter()
        # 同一应用上下文内可能处理多个请求，每次重新生成
        g.pop(_REQUEST_ID_KEY, None)
        current_request_id()

    @app.after_request
    def _finish_request(resp):
        started = g.pop("_req_start", None)
        duration_ms = round((time.perf_counter() - started) * 1000, 1) if started else None
        resp.headers[REQUEST_ID_HEADER] = current_request_id()
        access_log.info(
            "%s %s -> %s", request.method, request.path, resp.status_code,
            extra={"status": resp.status_code, "duration_ms": duration_ms},
        )
        return resp

    @app.errorhandler(Exception)
    def _unhandled(e):
        if isinstance(e, HTTPException):
            return json_response(code=e.code, message=e.description)
        app.logger.exception("unhandled exception on %s %s", request.method, request.path)
        return json_response(code=500, message="Internal server error")
