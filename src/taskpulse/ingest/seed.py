"""示例销售任务生成器

数据源返回空数组时作为降级数据来源。
传入 seed 时输出可复现（id 除外）。
"""

import random
from datetime import datetime, timedelta

import structlog

from taskpulse.core.models import Priority, Task, TaskStatus
from taskpulse.core.models.task import utc_now

log = structlog.get_logger()

_ACTIONS = [
    "Follow up with",
    "Prepare proposal for",
    "Demo product to",
    "Negotiate renewal with",
    "Cold call",
    "Send pricing to",
    "Qualify lead from",
    "Close deal with",
]

_ACCOUNTS = [
    "Acme Corp",
    "Globex",
    "Initech",
    "Umbrella Ltd",
    "Stark Industries",
    "Wayne Enterprises",
    "Hooli",
    "Soylent",
    "Vandelay Imports",
    "Wonka Industries",
]

_NOTES = [
    "",
    "Decision maker is the CFO",
    "Asked for a discount on annual plan",
    "Budget approved next quarter",
    "Competitor already in evaluation",
]


def generate_sales_tasks(
    count: int,
    seed: int | None = None,
    now: datetime | None = None,
) -> list[Task]:
    """生成 count 条示例销售任务

    Args:
        count: 生成数量
        seed: 随机种子，None 表示不固定
        now: 参考时间，createdAt 在其之前 1~count 天内

    Returns:
        Task 列表，满足全部字段不变量
    """
    rng = random.Random(seed)
    reference = now or utc_now()
    tasks: list[Task] = []

    for index in range(count):
        status = rng.choice(list(TaskStatus))
        created_at = reference - timedelta(days=index + 1, hours=rng.randint(0, 23))
        completed_at = None
        if status == TaskStatus.DONE:
            completed_at = created_at + timedelta(hours=rng.randint(1, 72))

        tasks.append(
            Task(
                title=f"{rng.choice(_ACTIONS)} {rng.choice(_ACCOUNTS)}",
                revenue=rng.randrange(0, 20_000, 50),
                time_taken=rng.randint(1, 24),
                priority=rng.choice(list(Priority)),
                status=status,
                notes=rng.choice(_NOTES),
                created_at=created_at,
                completed_at=completed_at,
            )
        )

    log.info("fallback_tasks_generated", count=count, seed=seed)
    return tasks
