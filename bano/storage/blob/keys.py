import os
import re
import uuid
from datetime import datetime
from typing import Optional

from bano.core.time import now_utc

_SEGMENT_RE = re.compile(r"[^a-zA-Z0-9_-]")
_IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".bmp"}


def sanitize_segment(value: str, default: str = "") -> str:
    cleaned = _SEGMENT_RE.sub("", value or "")
    return cleaned or default


def image_ext(filename: Optional[str]) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    return ext if ext in _IMAGE_EXTS else ""


def build_object_key(prefix: str, category: str, filename: Optional[str], dt: Optional[datetime] = None) -> str:
    """
    生成对象 key：<prefix>/<category>/YYYY/MM/<uuid><ext>
    """
    parts = []
    prefix = (prefix or "").strip("/")
    if prefix:
        parts.append(prefix)
    parts.append(sanitize_segment(category, "misc"))
    dt = dt or now_utc()
    parts.append(dt.strftime("%Y"))
    parts.append(dt.strftime("%m"))
    parts.append(f"{uuid.uuid4().hex}{image_ext(filename)}")
    return "/".join(parts)
