"""CLI 入口模块 -- python -m taskpulse.ingest <command>

支持的命令：
  summary [source]  加载任务数据并输出汇总指标与 ROI 排名前 10 的任务
"""

import asyncio
import sys

from taskpulse.core.config import load_grade_thresholds
from taskpulse.core.logging_config import setup_logging
from taskpulse.core.store import TaskStore

from .config import load_ingest_config
from .loader import load_tasks

TOP_N = 10


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m taskpulse.ingest <command> [source]")
        print("命令:")
        print("  summary [source]  输出汇总指标与 ROI 排名")
        sys.exit(1)

    command = sys.argv[1]

    if command == "summary":
        source = sys.argv[2] if len(sys.argv) > 2 else None
        sys.exit(asyncio.run(summary(source)))
    else:
        print(f"未知命令: {command}")
        print("可用命令: summary")
        sys.exit(1)


async def summary(source: str | None = None) -> int:
    """加载任务并打印汇总，返回进程退出码"""
    setup_logging()

    config = load_ingest_config()
    if source:
        config = config.model_copy(update={"tasks_source": source})

    store = TaskStore(thresholds=load_grade_thresholds())
    try:
        await load_tasks(store, config)
        if store.error:
            print(f"加载失败: {store.error}")
            return 1

        metrics = store.metrics()
        print(f"数据源: {config.tasks_source}")
        print(f"任务数: {len(store.tasks)}")
        print(f"总收入: {metrics.total_revenue:.2f}")
        print(f"总耗时: {metrics.total_time_taken:.2f} h")
        print(f"完成耗时占比: {metrics.time_efficiency_pct:.1f}%")
        print(f"每小时收入: {metrics.revenue_per_hour:.2f}")
        print(f"平均 ROI: {metrics.average_roi:.2f}")
        print(f"绩效等级: {metrics.performance_grade}")
        print()
        print(f"ROI 排名前 {TOP_N}:")
        for rank, task in enumerate(store.derived_sorted()[:TOP_N], start=1):
            print(
                f"  {rank:>2}. {task.title} "
                f"[{task.status}/{task.priority}] ROI={task.roi:.2f}"
            )
        return 0
    finally:
        store.close()


if __name__ == "__main__":
    main()
