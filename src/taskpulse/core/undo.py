"""删除/撤销单槽状态机

状态：IDLE / PENDING_UNDO，容量恰好为 1。
再次删除会直接覆盖槽内尚未撤销的任务，被覆盖的任务不可恢复。
"""

import structlog

from .models.enums import UndoState
from .models.task import Task

log = structlog.get_logger()


class UndoSlot:
    """单槽撤销缓存"""

    def __init__(self) -> None:
        self._state = UndoState.IDLE
        self._held: Task | None = None

    @property
    def state(self) -> UndoState:
        return self._state

    @property
    def held(self) -> Task | None:
        return self._held

    @property
    def is_open(self) -> bool:
        return self._state == UndoState.PENDING_UNDO

    def hold(self, task: Task | None) -> None:
        """捕获被删除的任务（可能为 None），进入 PENDING_UNDO"""
        if self._held is not None:
            log.info("undo_slot_overwritten", discarded_task_id=self._held.id)
        self._held = task
        self._state = UndoState.PENDING_UNDO

    def take(self) -> Task | None:
        """取出待恢复任务并回到 IDLE

        IDLE 状态或槽内为 None 时不做任何状态变更，返回 None。
        """
        if self._state != UndoState.PENDING_UNDO or self._held is None:
            return None
        task = self._held
        self._held = None
        self._state = UndoState.IDLE
        return task

    def clear(self) -> Task | None:
        """永久丢弃槽内任务并回到 IDLE，返回被丢弃的任务"""
        task = self._held
        self._held = None
        self._state = UndoState.IDLE
        return task
