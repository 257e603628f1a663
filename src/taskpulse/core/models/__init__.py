"""TaskPulse Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .derived import DerivedTask
from .enums import (
    PRIORITY_WEIGHTS,
    STATUS_ALIASES,
    PerformanceGrade,
    Priority,
    TaskStatus,
    UndoState,
)
from .metrics import EMPTY_METRICS, Metrics
from .task import FIELD_NAMES, Task, new_task_id, task_field_values

__all__ = [
    # 枚举
    "Priority",
    "TaskStatus",
    "PerformanceGrade",
    "UndoState",
    "PRIORITY_WEIGHTS",
    "STATUS_ALIASES",
    # Task
    "Task",
    "FIELD_NAMES",
    "new_task_id",
    "task_field_values",
    "DerivedTask",
    # Metrics
    "Metrics",
    "EMPTY_METRICS",
]
