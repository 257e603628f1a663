"""配置常量模块 -- 可通过环境变量覆盖

包含 Task 字段默认值和 ROI -> 绩效等级的阈值表。
"""

import os

import structlog
from pydantic import BaseModel, Field, ValidationError, model_validator

log = structlog.get_logger()

# 缺省标题
DEFAULT_TITLE: str = "Untitled Task"

# 耗时下限（小时），<= 0 的耗时一律归为此值
DEFAULT_TIME_TAKEN: float = 1.0

# 导入时缺省 createdAt 的回溯步长（天），第 i 条记录回溯 i+1 天
BACKDATE_STEP_DAYS: int = 1

# 导入时 Done 任务缺省 completedAt 相对 createdAt 的偏移（天）
COMPLETION_OFFSET_DAYS: int = 1


class GradeThresholds(BaseModel):
    """ROI -> 绩效等级阈值表

    average_roi > excellent_min_roi      -> Excellent
    average_roi >= good_min_roi          -> Good
    其他（含 NaN）                       -> Needs Improvement
    """

    excellent_min_roi: float = Field(
        default=500.0,
        allow_inf_nan=False,
        description="Excellent 下限（不含）",
    )
    good_min_roi: float = Field(
        default=200.0,
        allow_inf_nan=False,
        description="Good 下限（含）",
    )

    @model_validator(mode="after")
    def _check_monotonic(self) -> "GradeThresholds":
        if self.good_min_roi > self.excellent_min_roi:
            raise ValueError("good_min_roi 不能大于 excellent_min_roi")
        return self


DEFAULT_GRADE_THRESHOLDS = GradeThresholds()


def load_grade_thresholds() -> GradeThresholds:
    """从环境变量加载绩效等级阈值

    环境变量映射:
        TASKPULSE_GRADE_EXCELLENT_ROI -> excellent_min_roi (默认 500)
        TASKPULSE_GRADE_GOOD_ROI -> good_min_roi (默认 200)

    非法值记录警告并回退到默认阈值表，不阻塞启动。
    """
    kwargs: dict = {}

    for env_var, field in (
        ("TASKPULSE_GRADE_EXCELLENT_ROI", "excellent_min_roi"),
        ("TASKPULSE_GRADE_GOOD_ROI", "good_min_roi"),
    ):
        if val := os.environ.get(env_var):
            try:
                kwargs[field] = float(val)
            except ValueError:
                log.warning(
                    "invalid_grade_threshold_config",
                    env_var=env_var,
                    value=val,
                )

    try:
        return GradeThresholds(**kwargs)
    except ValidationError as e:
        log.warning(
            "grade_thresholds_not_monotonic",
            error=str(e),
            fallback=DEFAULT_GRADE_THRESHOLDS.model_dump(),
        )
        return DEFAULT_GRADE_THRESHOLDS
