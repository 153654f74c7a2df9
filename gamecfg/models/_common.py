"""Column defaults shared by the models"""

import uuid
from datetime import datetime, timezone


def generate_id() -> str:
    """Opaque unique identifier for new rows"""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    # Python-side so ordering by timestamp keeps microsecond resolution
    return datetime.now(timezone.utc)
