"""全局 pytest 配置 -- 固定时钟 + Store / 任务样例 fixture"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest
from taskpulse.core.models import Task
from taskpulse.core.store import TaskStore

BASE_TIME = datetime(2024, 5, 1, 9, 0, tzinfo=UTC)


class TickingClock:
    """每次调用前进一分钟的测试时钟"""

    def __init__(self, start: datetime = BASE_TIME) -> None:
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(minutes=1)
        return now


@pytest.fixture
def clock() -> TickingClock:
    """单调递增的测试时钟"""
    return TickingClock()


@pytest.fixture
def store(clock: TickingClock) -> TaskStore:
    """空 Store（使用测试时钟）"""
    return TaskStore(clock=clock)


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Task 构造工厂"""

    def _make(**kwargs) -> Task:
        kwargs.setdefault("created_at", BASE_TIME)
        return Task(**kwargs)

    return _make


@pytest.fixture
def task_a(make_task) -> Task:
    """ROI = 100 / 2 = 50"""
    return make_task(id="task-a", title="A", revenue=100, time_taken=2)


@pytest.fixture
def task_b(make_task) -> Task:
    """ROI = 300 / 3 = 100"""
    return make_task(id="task-b", title="B", revenue=300, time_taken=3)
