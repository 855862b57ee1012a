"""Common helpers shared across models."""

from datetime import UTC, datetime

SUCCESS_CODE = "200"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()
