"""DerivedTask -- Task 的计算视图

仅用于展示与排序，不会回写到 Task，随时可由 Task 重新计算得到。
"""

from pydantic import Field

from .task import Task


class DerivedTask(Task):
    """Task + 计算字段"""

    roi: float = Field(description="投入产出比 revenue / time_taken")
    priority_weight: int = Field(ge=1, le=3, description="优先级权重（High=3, Medium=2, Low=1）")
