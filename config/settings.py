# config/settings.py
"""
按环境划分的配置类，所有值都可以被环境变量 / .env 覆盖。
  development: 本地 SQLite 文件
  production:  DATABASE_URI 必填
  testing:     内存 SQLite，关闭文件日志
"""
import os
from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
load_dotenv(os.path.join(BASE_DIR, ".env"))


def _env_bool(name, default=False):
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name, default):
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else default


def _env_roles(name, default):
    """逗号分隔的角色列表，例如 "view,edit"。"""
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    return [item.strip().lower() for item in raw.split(",") if item.strip()]


class BaseConfig:
    APP_NAME = os.getenv("APP_NAME", "issue-tracker")
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_AS_ASCII = False

    # 日志
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", os.path.join(BASE_DIR, "logs"))
    LOG_JSON = _env_bool("LOG_JSON", True)
    LOG_TO_FILE = _env_bool("LOG_TO_FILE", True)
    LOG_MAX_BYTES = _env_int("LOG_MAX_BYTES", 5 * 1024 * 1024)
    LOG_BACKUP_COUNT = _env_int("LOG_BACKUP_COUNT", 5)

    # 服务监听
    SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
    SERVER_PORT = _env_int("SERVER_PORT", 2022)

    # 哪些成员角色可以在项目下写入（issue / 评论 / 附件）；项目创建人始终放行。
    # 设为 "edit" 即禁止只读成员写入
    PROJECT_MUTATION_ROLES = _env_roles("PROJECT_MUTATION_ROLES", ("view", "edit"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DEV_DATABASE_URI", "sqlite:///" + os.path.join(BASE_DIR, "issue_tracker.db")
    )


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True, "pool_recycle": 1800}


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URI", "sqlite:///:memory:")
    LOG_TO_FILE = False
    LOG_JSON = False
    LOG_LEVEL = "WARNING"


config_map = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(config_name):
    return config_map.get(config_name, DevelopmentConfig)
