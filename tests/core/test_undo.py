"""删除/撤销单槽状态机单元测试

测试内容：
1. 初始状态
2. hold / take / clear 流转
3. 单槽覆盖
4. 误用时静默忽略
"""

from taskpulse.core.models import UndoState
from taskpulse.core.undo import UndoSlot


class TestUndoSlot:
    """UndoSlot 状态流转测试"""

    def test_initial_state(self):
        slot = UndoSlot()
        assert slot.state == UndoState.IDLE
        assert slot.held is None
        assert slot.is_open is False

    def test_hold_opens_window(self, task_a):
        slot = UndoSlot()
        slot.hold(task_a)
        assert slot.state == UndoState.PENDING_UNDO
        assert slot.held == task_a
        assert slot.is_open is True

    def test_take_returns_task_and_resets(self, task_a):
        slot = UndoSlot()
        slot.hold(task_a)
        assert slot.take() == task_a
        assert slot.state == UndoState.IDLE
        assert slot.held is None

    def test_second_hold_overwrites(self, task_a, task_b):
        """单槽：第二次删除覆盖第一次，第一次不可恢复"""
        slot = UndoSlot()
        slot.hold(task_a)
        slot.hold(task_b)
        assert slot.take() == task_b
        assert slot.take() is None

    def test_take_when_idle_is_noop(self):
        slot = UndoSlot()
        assert slot.take() is None
        assert slot.state == UndoState.IDLE

    def test_hold_none_then_take_is_noop(self):
        """槽内为 None 时 take 不改变状态"""
        slot = UndoSlot()
        slot.hold(None)
        assert slot.state == UndoState.PENDING_UNDO
        assert slot.take() is None
        assert slot.state == UndoState.PENDING_UNDO

    def test_clear_discards(self, task_a):
        slot = UndoSlot()
        slot.hold(task_a)
        assert slot.clear() == task_a
        assert slot.state == UndoState.IDLE
        assert slot.held is None
        assert slot.take() is None

    def test_clear_when_idle(self):
        slot = UndoSlot()
        assert slot.clear() is None
        assert slot.state == UndoState.IDLE
