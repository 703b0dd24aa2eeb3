# app.py
from flask import Flask
from config.settings import get_config
from extensions.database import db, migrate
from extensions.logger import init_logger
from utils.response import json_response
from utils.exceptions import BizError
from utils.permissions import ProjectAccessPolicy
from controllers.health_controller import health_bp
from controllers.user_controller import user_bp
from controllers.project_controller import project_bp
from controllers.issue_controller import issue_bp

import models  # noqa: F401  注册全部模型，供 create_all / Flask-Migrate 使用


def create_app(config_name="development"):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    # 写入策略配置错误时启动即失败
    try:
        ProjectAccessPolicy.from_roles(app.config["PROJECT_MUTATION_ROLES"])
    except ValueError as e:
        raise RuntimeError(f"invalid PROJECT_MUTATION_ROLES: {e}") from e

    # 初始化扩展
    db.init_app(app)
    migrate.init_app(app, db)
    init_logger(app)
    app.logger.info("database uri: %s", app.config["SQLALCHEMY_DATABASE_URI"])

    # 健康检查
    app.register_blueprint(health_bp)
    # 用户
    app.register_blueprint(user_bp)
    # 项目 / 成员 / 项目下的 issue
    app.register_blueprint(project_bp)
    # issue 详情 / 更新 / 评论 / 附件
    app.register_blueprint(issue_bp)

    # 错误处理
    @app.errorhandler(404)
    def not_found(e):
        return json_response(message="Endpoint not found", code=404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return json_response(message="Method not allowed", code=405)

    @app.errorhandler(500)
    def server_error(e):
        return json_response(message="Internal server error", code=500)

    @app.errorhandler(BizError)
    def _biz_err(e: BizError):
        return json_response(code=e.code, message=e.message, data=e.data)

    return app


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
    app.run(host=app.config["SERVER_HOST"], port=app.config["SERVER_PORT"], debug=app.config.get("DEBUG", False))
