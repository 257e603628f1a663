"""指标汇总模块 -- 从任务集合计算 Metrics 快照

纯函数实现：相同输入两次调用得到完全相同的输出。
"""

from collections.abc import Sequence

from .config import GradeThresholds
from .derivation import compute_roi, grade_from_roi
from .models.metrics import EMPTY_METRICS, Metrics
from .models.task import Task


def compute_total_revenue(tasks: Sequence[Task]) -> float:
    return sum(task.revenue for task in tasks)


def compute_total_time_taken(tasks: Sequence[Task]) -> float:
    return sum(task.time_taken for task in tasks)


def compute_time_efficiency(tasks: Sequence[Task]) -> float:
    """已完成任务耗时占总耗时的百分比"""
    total = compute_total_time_taken(tasks)
    if total == 0:
        return 0.0
    done = sum(task.time_taken for task in tasks if task.is_done)
    return done / total * 100


def compute_revenue_per_hour(tasks: Sequence[Task]) -> float:
    """总收入 / 总耗时（ratio-of-sums）"""
    total = compute_total_time_taken(tasks)
    if total == 0:
        return 0.0
    return compute_total_revenue(tasks) / total


def compute_average_roi(tasks: Sequence[Task]) -> float:
    """各任务 ROI 的算术平均（mean-of-ratios）"""
    if not tasks:
        return 0.0
    return sum(compute_roi(task) for task in tasks) / len(tasks)


def compute_metrics(
    tasks: Sequence[Task],
    thresholds: GradeThresholds | None = None,
) -> Metrics:
    """计算任务集合的汇总指标

    Args:
        tasks: 任务集合
        thresholds: 绩效等级阈值表，None 使用默认阈值

    Returns:
        Metrics 快照；空集合直接返回 EMPTY_METRICS 哨兵
    """
    if not tasks:
        return EMPTY_METRICS

    average_roi = compute_average_roi(tasks)
    return Metrics(
        total_revenue=compute_total_revenue(tasks),
        total_time_taken=compute_total_time_taken(tasks),
        time_efficiency_pct=compute_time_efficiency(tasks),
        revenue_per_hour=compute_revenue_per_hour(tasks),
        average_roi=average_roi,
        performance_grade=grade_from_roi(average_roi, thresholds),
    )
