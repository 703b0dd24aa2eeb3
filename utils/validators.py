import re
from datetime import date, datetime
from typing import Optional, Tuple
from urllib.parse import urlparse

from utils.datetime_helpers import to_naive_utc

EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
# https://github.com/<owner>/<repo>(.git)
GITHUB_REPO_RE = re.compile(r"github\.com/([^/]+)/([^/?#]+)")


def validate_email(email: str) -> bool:
    if not isinstance(email, str):
        return False
    return bool(EMAIL_RE.match(email))


def validate_url(url: str) -> bool:
    if not isinstance(url, str):
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def parse_github_repo(url: str) -> Optional[Tuple[str, str]]:
    """
    从 GitHub 仓库地址解析 (owner, repo)：
      https://github.com/octo/hello.git -> ("octo", "hello")
    非 GitHub 地址返回 None
    """
    if not url:
        return None
    match = GITHUB_REPO_RE.search(url)
    if not match:
        return None
    owner, repo = match.group(1), match.group(2)
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not owner or not repo:
        return None
    return owner, repo


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_int(value) -> bool:
    # bool 是 int 的子类，这里排除
    return isinstance(value, int) and not isinstance(value, bool)


def parse_datetime(value) -> Optional[datetime]:
    """
    解析 ISO 8601 日期 / 日期时间；带时区的统一转换为 naive UTC。
    无法解析时抛出 ValueError。
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        parsed = datetime.fromisoformat(raw)
    else:
        raise ValueError(f"unsupported datetime value: {value!r}")
    if parsed.tzinfo is not None:
        parsed = to_naive_utc(parsed)
    return parsed
