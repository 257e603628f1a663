"""导入数据标准化

把外部数据源的松散记录逐条转换为合法的 Task：
- 缺失 id 时生成 ULID
- 缺失 createdAt 时按记录序号回溯（第 i 条回溯 i+1 天），保证示例数据的时间顺序合理
- Done 任务缺失 completedAt 时取 createdAt + 1 天
- 其余字段的兜底规则由 Task 模型校验完成
"""

from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta
from typing import Any

from taskpulse.core.config import BACKDATE_STEP_DAYS, COMPLETION_OFFSET_DAYS
from taskpulse.core.models import Task, task_field_values
from taskpulse.core.models.task import utc_now


def normalize_task(record: Mapping[str, Any], index: int, now: datetime) -> Task:
    """标准化单条记录

    Raises:
        pydantic.ValidationError: 时间戳无法解析
    """
    values = task_field_values(record)
    if not values.get("created_at"):
        values["created_at"] = now - timedelta(days=(index + 1) * BACKDATE_STEP_DAYS)
    if not values.get("completed_at"):
        values.pop("completed_at", None)

    task = Task.model_validate(values)
    if task.completed_at is None and task.is_done:
        task = task.model_copy(
            update={"completed_at": task.created_at + timedelta(days=COMPLETION_OFFSET_DAYS)}
        )
    return task


def normalize_tasks(
    records: Sequence[Mapping[str, Any]],
    now: datetime | None = None,
) -> list[Task]:
    """标准化整批记录，保持输入顺序"""
    reference = now or utc_now()
    return [normalize_task(record, index, reference) for index, record in enumerate(records)]
