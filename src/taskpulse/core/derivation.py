"""派生计算模块 -- 单任务 ROI 视图、确定性排序、ROI -> 绩效等级映射

所有函数均为纯函数，不修改输入。
"""

import math
from collections.abc import Iterable

from .config import DEFAULT_GRADE_THRESHOLDS, GradeThresholds
from .models.derived import DerivedTask
from .models.enums import PRIORITY_WEIGHTS, PerformanceGrade
from .models.task import Task


def compute_roi(task: Task) -> float:
    """单任务 ROI = revenue / time_taken（time_taken 恒 > 0）"""
    return task.revenue / task.time_taken


def derive_task(task: Task) -> DerivedTask:
    """构造 Task 的派生视图"""
    return DerivedTask(
        **task.model_dump(),
        roi=compute_roi(task),
        priority_weight=PRIORITY_WEIGHTS[task.priority],
    )


def sort_derived(items: Iterable[DerivedTask]) -> list[DerivedTask]:
    """按 ROI 降序排序

    sorted() 是稳定排序，ROI 相同的任务保持输入顺序。
    """
    return sorted(items, key=lambda item: item.roi, reverse=True)


def derive_all(tasks: Iterable[Task]) -> list[DerivedTask]:
    """派生并排序整个任务集合"""
    return sort_derived(derive_task(task) for task in tasks)


def grade_from_roi(
    average_roi: float,
    thresholds: GradeThresholds | None = None,
) -> PerformanceGrade:
    """将平均 ROI 映射为绩效等级

    阈值表单调不减：ROI 越高等级不会越低；任何输入（含 NaN）都有唯一等级。

    Args:
        average_roi: 平均 ROI
        thresholds: 阈值表，None 使用默认阈值

    Returns:
        PerformanceGrade
    """
    table = thresholds or DEFAULT_GRADE_THRESHOLDS
    if math.isnan(average_roi):
        return PerformanceGrade.NEEDS_IMPROVEMENT
    if average_roi > table.excellent_min_roi:
        return PerformanceGrade.EXCELLENT
    if average_roi >= table.good_min_roi:
        return PerformanceGrade.GOOD
    return PerformanceGrade.NEEDS_IMPROVEMENT
