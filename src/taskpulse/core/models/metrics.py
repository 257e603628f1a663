"""Metrics -- 任务集合的汇总指标快照"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import PerformanceGrade


class Metrics(BaseModel):
    """汇总指标

    average_roi 是各任务 ROI 的算术平均（mean-of-ratios），
    revenue_per_hour 是总收入 / 总耗时（ratio-of-sums），两者是不同的统计量。
    """

    model_config = ConfigDict(frozen=True)

    total_revenue: float = Field(default=0.0, description="总收入")
    total_time_taken: float = Field(default=0.0, description="总耗时（小时）")
    time_efficiency_pct: float = Field(default=0.0, description="已完成任务耗时占比（%）")
    revenue_per_hour: float = Field(default=0.0, description="每小时收入")
    average_roi: float = Field(default=0.0, description="平均 ROI")
    performance_grade: PerformanceGrade = Field(
        default=PerformanceGrade.NEEDS_IMPROVEMENT,
        description="绩效等级",
    )


# 空集合时的固定哨兵值
EMPTY_METRICS = Metrics()
