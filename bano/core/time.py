from datetime import datetime, timezone


def now_utc():
    """返回带时区的 UTC 当前时间"""
    return datetime.now(timezone.utc)
