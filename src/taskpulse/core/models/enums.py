"""枚举定义

包含 Priority、TaskStatus、PerformanceGrade 三个枚举，
以及删除/撤销单槽状态机的 UndoState。
"""

from enum import StrEnum


class Priority(StrEnum):
    """任务优先级"""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TaskStatus(StrEnum):
    """任务状态"""

    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


# 外部数据中出现过的状态写法
STATUS_ALIASES: dict[str, TaskStatus] = {
    "InProgress": TaskStatus.IN_PROGRESS,
}

# 优先级权重（仅用于展示）
PRIORITY_WEIGHTS: dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


class PerformanceGrade(StrEnum):
    """绩效等级"""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"


class UndoState(StrEnum):
    """删除/撤销单槽状态"""

    IDLE = "IDLE"
    PENDING_UNDO = "PENDING_UNDO"
