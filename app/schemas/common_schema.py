# app/schemas/common_schema.py
# 各 Schema 共用的型別
from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator


def to_epoch_seconds(value: Any) -> int:
    """datetime -> epoch 秒數；None -> 0 (資料庫存的是 UTC，不帶時區)"""
    if value is None:
        return 0
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return value


def from_epoch_seconds(value: Optional[int]) -> Optional[datetime]:
    """epoch 秒數 -> 不帶時區的 UTC datetime；0 或 None 視為未設定"""
    if not value:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc).replace(tzinfo=None)


# 回應中的時間一律使用 epoch 秒數
EpochSeconds = Annotated[int, BeforeValidator(to_epoch_seconds)]
