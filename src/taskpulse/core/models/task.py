"""Task Domain Model

Task 是任务集合中的唯一事实来源，实例不可变，
任何修改都通过构造新实例完成。所有字段在校验阶段完成兜底转换，
松散输入不会导致异常（时间戳格式错误除外）。
"""

import math
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from ulid import ULID

from ..config import DEFAULT_TIME_TAKEN, DEFAULT_TITLE
from .enums import STATUS_ALIASES, Priority, TaskStatus


def new_task_id() -> str:
    """生成任务 ID（ULID 格式）"""
    return str(ULID())


def utc_now() -> datetime:
    return datetime.now(UTC)


def coerce_revenue(value: Any) -> float:
    """收入兜底：非数值、非有限值、负数均归零"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def coerce_time_taken(value: Any) -> float:
    """耗时兜底：任何 <= 0 或无法解析的值都归为最小值 1"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_TIME_TAKEN
    if not math.isfinite(number) or number <= 0:
        return DEFAULT_TIME_TAKEN
    return number


class Task(BaseModel):
    """Task 数据模型

    不变量：time_taken > 0，revenue 为有限非负数。
    输入同时接受 snake_case 与 camelCase 字段名（timeTaken、createdAt ...）。
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(default_factory=new_task_id, description="唯一标识，ULID 格式")
    title: str = Field(default=DEFAULT_TITLE, description="任务标题")
    revenue: float = Field(default=0.0, ge=0, description="收入")
    time_taken: float = Field(default=DEFAULT_TIME_TAKEN, gt=0, description="耗时（小时）")
    priority: Priority = Field(default=Priority.MEDIUM, description="优先级")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="当前状态")
    notes: str = Field(default="", description="备注")
    created_at: datetime = Field(default_factory=utc_now, description="创建时间")
    completed_at: datetime | None = Field(default=None, description="完成时间")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        if value is None or value == "":
            return new_task_id()
        return str(value)

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, value: Any) -> str:
        if value is None:
            return DEFAULT_TITLE
        return str(value)

    @field_validator("notes", mode="before")
    @classmethod
    def _coerce_notes(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("revenue", mode="before")
    @classmethod
    def _coerce_revenue(cls, value: Any) -> float:
        return coerce_revenue(value)

    @field_validator("time_taken", mode="before")
    @classmethod
    def _coerce_time_taken(cls, value: Any) -> float:
        return coerce_time_taken(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _coerce_priority(cls, value: Any) -> Priority:
        if isinstance(value, Priority):
            return value
        try:
            return Priority(value)
        except ValueError:
            return Priority.MEDIUM

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> TaskStatus:
        if isinstance(value, TaskStatus):
            return value
        if isinstance(value, str) and value in STATUS_ALIASES:
            return STATUS_ALIASES[value]
        try:
            return TaskStatus(value)
        except ValueError:
            return TaskStatus.TODO

    @field_validator("created_at", "completed_at")
    @classmethod
    def _ensure_aware(cls, value: datetime | None) -> datetime | None:
        # 无时区的时间戳按 UTC 处理，保证可比较
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE


# camelCase / snake_case -> 字段名
FIELD_NAMES: dict[str, str] = {
    **{to_camel(name): name for name in Task.model_fields},
    **{name: name for name in Task.model_fields},
}


def task_field_values(data: Mapping[str, Any]) -> dict[str, Any]:
    """将 camelCase / snake_case 键统一为字段名，丢弃未知键"""
    return {FIELD_NAMES[key]: value for key, value in data.items() if key in FIELD_NAMES}
