"""TaskStore -- 内存任务集合 + 变更 API + 删除/撤销

Store 是任务集合的唯一写入方，同时持有单槽撤销缓存。
消费方只读取派生视图（derived_sorted / metrics），不直接修改集合。

所有变更操作同步执行、彼此原子，不会抛出异常：
- 松散输入一律兜底转换
- 未知 id 的 update/delete 静默忽略
- 无可撤销内容时 undo 静默忽略
"""

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

import structlog
from pydantic import ValidationError

from .config import GradeThresholds
from .derivation import derive_all
from .metrics import compute_metrics
from .models.derived import DerivedTask
from .models.enums import TaskStatus, UndoState
from .models.metrics import Metrics
from .models.task import FIELD_NAMES, Task, task_field_values, utc_now
from .undo import UndoSlot

log = structlog.get_logger()

# update 补丁中不允许覆盖的字段
_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def _merge_patch(task: Task, values: dict[str, Any]) -> Task:
    """合并补丁；无法解析的字段丢弃，保留原值"""
    try:
        return Task.model_validate({**task.model_dump(), **values})
    except ValidationError as e:
        rejected = {
            FIELD_NAMES.get(str(err["loc"][0]), str(err["loc"][0]))
            for err in e.errors()
            if err["loc"]
        }
        log.warning(
            "task_patch_fields_rejected",
            task_id=task.id,
            fields=sorted(rejected),
        )
        kept = {name: value for name, value in values.items() if name not in rejected}
        return Task.model_validate({**task.model_dump(), **kept})


class TaskStore:
    """内存任务 Store

    每个会话构造一次，使用完毕后显式 close()。
    derived_sorted() / metrics() 按集合版本号缓存，每次变更后重新计算。
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        thresholds: GradeThresholds | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._tasks: list[Task] = list(tasks)
        self._thresholds = thresholds
        self._clock = clock
        self._undo = UndoSlot()
        self._version = 0
        self._loading = False
        self._error: str | None = None
        self._closed = False
        self._derived_cache: tuple[int, tuple[DerivedTask, ...]] | None = None
        self._metrics_cache: tuple[int, Metrics] | None = None

    # ---- 读取 ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def version(self) -> int:
        return self._version

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def last_deleted(self) -> Task | None:
        return self._undo.held

    @property
    def undo_open(self) -> bool:
        return self._undo.is_open

    @property
    def undo_state(self) -> UndoState:
        return self._undo.state

    def get_task(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def derived_sorted(self) -> list[DerivedTask]:
        """按 ROI 降序的派生任务列表"""
        if self._derived_cache is None or self._derived_cache[0] != self._version:
            self._derived_cache = (self._version, tuple(derive_all(self._tasks)))
        return list(self._derived_cache[1])

    def metrics(self) -> Metrics:
        """当前集合的汇总指标"""
        if self._metrics_cache is None or self._metrics_cache[0] != self._version:
            self._metrics_cache = (
                self._version,
                compute_metrics(self._tasks, self._thresholds),
            )
        return self._metrics_cache[1]

    # ---- 变更 API ----

    def add_task(self, data: Mapping[str, Any]) -> Task:
        """新增任务并追加到集合末尾

        未提供 id 时生成 ULID；created_at 取当前时间；
        仅当初始状态为 Done 时 completed_at 取当前时间，否则为空。
        """
        now = self._clock()
        values = task_field_values(data)
        values["created_at"] = now
        values.pop("completed_at", None)
        task = Task.model_validate(values)
        if task.is_done:
            task = task.model_copy(update={"completed_at": now})

        self._tasks.append(task)
        self._touch()
        log.info(
            "task_added",
            task_id=task.id,
            status=task.status.value,
            task_count=len(self._tasks),
        )
        return task

    def update_task(self, task_id: str, patch: Mapping[str, Any]) -> Task | None:
        """合并补丁到指定任务

        id 不存在时静默忽略并返回 None。
        状态由非 Done 变为 Done 时写入 completed_at；
        由 Done 变回其他状态时 completed_at 保持不变。
        无法解析的补丁字段（如非法 completedAt）被丢弃，不抛异常。
        """
        values = {
            name: value
            for name, value in task_field_values(patch).items()
            if name not in _IMMUTABLE_FIELDS
        }
        replacements: dict[int, Task] = {}
        for index, task in enumerate(self._tasks):
            if task.id != task_id:
                continue
            merged = _merge_patch(task, values)
            if task.status != TaskStatus.DONE and merged.status == TaskStatus.DONE:
                merged = merged.model_copy(update={"completed_at": self._clock()})
            replacements[index] = merged

        if not replacements:
            log.debug("task_update_ignored", task_id=task_id)
            return None

        for index, merged in replacements.items():
            self._tasks[index] = merged
        updated = next(iter(replacements.values()))
        self._touch()
        log.info(
            "task_updated",
            task_id=task_id,
            fields=sorted(values),
            status=updated.status.value,
        )
        return updated

    def delete_task(self, task_id: str) -> Task | None:
        """删除任务并打开撤销窗口

        被删除的任务（不存在时为 None）进入单槽缓存，
        覆盖之前尚未撤销的删除。
        """
        target = self.get_task(task_id)
        remaining = [task for task in self._tasks if task.id != task_id]
        self._undo.hold(target)

        if target is None:
            log.debug("task_delete_missing", task_id=task_id)
            return None

        self._tasks = remaining
        self._touch()
        log.info("task_deleted", task_id=task_id, task_count=len(self._tasks))
        return target

    def undo_delete(self) -> Task | None:
        """恢复最近一次删除的任务，追加到集合末尾（不回到原位置）"""
        task = self._undo.take()
        if task is None:
            return None

        self._tasks.append(task)
        self._touch()
        log.info("task_restored", task_id=task.id, task_count=len(self._tasks))
        return task

    def clear_undo(self) -> None:
        """关闭撤销窗口，永久丢弃槽内任务"""
        discarded = self._undo.clear()
        if discarded is not None:
            log.info("task_delete_committed", task_id=discarded.id)

    # ---- 加载生命周期 ----

    def begin_load(self) -> None:
        self._loading = True

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """整体替换任务集合（仅供初始加载使用）"""
        self._tasks = list(tasks)
        self._touch()

    def fail_load(self, message: str) -> None:
        """记录加载错误信息（仅用于展示，不阻塞后续变更）"""
        self._error = message

    def finish_load(self) -> None:
        self._loading = False

    def close(self) -> None:
        """拆除 Store，之后到达的加载结果将被丢弃"""
        self._closed = True
        log.info("task_store_closed", task_count=len(self._tasks))

    def _touch(self) -> None:
        self._version += 1
