# app/models/types.py
# 自訂欄位型別與狀態列舉
import enum
import json
from typing import Dict, FrozenSet

from sqlalchemy import TEXT
from sqlalchemy.types import TypeDecorator


class StoredValueDecodeError(ValueError):
    """資料庫中的 JSON 文字無法還原成字串陣列"""


class JSONEncodedList(TypeDecorator):
    """
    字串陣列 <-> JSON 文字 (TEXT 欄位)

    - 寫入: list -> '["Go", "React"]'
    - 讀取: NULL 或空字串 -> []
    - 讀取: 不合法的 JSON 或不是陣列 -> StoredValueDecodeError (不默默回傳空陣列)
    """

    impl = TEXT
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return json.dumps([])
        return json.dumps(list(value), ensure_ascii=False)

    def process_result_value(self, value, dialect):
        if value is None or value == "":
            return []
        try:
            decoded = json.loads(value)
        except ValueError as e:
            raise StoredValueDecodeError(f"無法解析 JSON 陣列: {value!r}") from e
        # 舊資料可能存成 'null'
        if decoded is None:
            return []
        if not isinstance(decoded, list):
            raise StoredValueDecodeError(f"欄位內容不是陣列: {value!r}")
        return [str(item) for item in decoded]


# 對應 DB 的狀態欄位
class JobPostingStatusEnum(str, enum.Enum):
    open = "open"
    closed = "closed"
    filled = "filled"


class JobApplicationStatusEnum(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"
    withdrawn = "withdrawn"


# 允許的狀態轉換 (寫入相同狀態視為 no-op)
JOB_POSTING_TRANSITIONS: Dict[JobPostingStatusEnum, FrozenSet[JobPostingStatusEnum]] = {
    JobPostingStatusEnum.open: frozenset({JobPostingStatusEnum.closed, JobPostingStatusEnum.filled}),
    JobPostingStatusEnum.closed: frozenset({JobPostingStatusEnum.open}),
    JobPostingStatusEnum.filled: frozenset(),
}

JOB_APPLICATION_TRANSITIONS: Dict[JobApplicationStatusEnum, FrozenSet[JobApplicationStatusEnum]] = {
    JobApplicationStatusEnum.pending: frozenset({
        JobApplicationStatusEnum.accepted,
        JobApplicationStatusEnum.rejected,
        JobApplicationStatusEnum.withdrawn,
    }),
    JobApplicationStatusEnum.accepted: frozenset(),
    JobApplicationStatusEnum.rejected: frozenset(),
    JobApplicationStatusEnum.withdrawn: frozenset(),
}


def can_transition(transitions: Dict, current: enum.Enum, new: enum.Enum) -> bool:
    if current == new:
        return True
    return new in transitions.get(current, frozenset())
