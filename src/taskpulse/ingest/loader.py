"""TaskLoader -- 初始加载 + 降级

加载规则（两条路径不对称，必须严格保持）：
- 数据源成功但返回空数组：交给 Store 的是降级生成器产出的示例任务
- 数据源不可达或数据格式错误：记录错误信息，Store 的任务集合保持原值，不调用降级生成器

Store 在加载完成前被拆除时（store.closed），无论成功失败都丢弃结果，
也不再调用降级生成器。
"""

from collections.abc import Callable

import structlog
from pydantic import ValidationError

from taskpulse.core.models import Task
from taskpulse.core.store import TaskStore

from .config import IngestConfig, load_ingest_config
from .exceptions import MalformedSourceError, TaskSourceError
from .normalize import normalize_tasks
from .seed import generate_sales_tasks
from .sources import TaskSource, create_source

log = structlog.get_logger()

# 未预期异常时展示给用户的通用错误信息
DEFAULT_LOAD_ERROR = "加载任务数据失败"


class TaskLoader:
    """初始加载器

    降级链: TaskSource -> 示例任务生成器（仅在数据源返回空数组时）
    """

    def __init__(
        self,
        source: TaskSource,
        fallback: Callable[[int], list[Task]] = generate_sales_tasks,
        fallback_count: int = 50,
    ) -> None:
        """初始化加载器

        Args:
            source: 任务数据源
            fallback: 降级生成器 generate(n) -> n 条 Task
            fallback_count: 降级时生成的任务数
        """
        self._source = source
        self._fallback = fallback
        self._fallback_count = fallback_count

    async def fetch_tasks(self) -> list[Task]:
        """取回并标准化任务；空数组时返回降级生成器的结果

        Raises:
            TaskSourceError: 数据源不可达或数据格式错误
        """
        tasks = await self._fetch_normalized()
        return tasks or self._generate_fallback()

    async def _fetch_normalized(self) -> list[Task]:
        records = await self._source.fetch()
        try:
            return normalize_tasks(records)
        except ValidationError as e:
            raise MalformedSourceError(
                self._source.location,
                f"{e.error_count()} 个字段校验失败",
            ) from e

    def _generate_fallback(self) -> list[Task]:
        log.info(
            "task_source_empty_using_fallback",
            location=self._source.location,
            fallback_count=self._fallback_count,
        )
        return self._fallback(self._fallback_count)

    async def load_into(self, store: TaskStore) -> bool:
        """加载任务到 Store

        错误不会向外抛出，而是写入 store.error。

        Returns:
            True 如果任务集合已被替换，否则 False
        """
        store.begin_load()
        try:
            tasks = await self._fetch_normalized()
            if store.closed:
                log.info(
                    "task_load_discarded_store_closed",
                    location=self._source.location,
                )
                return False
            tasks = tasks or self._generate_fallback()
            store.replace_all(tasks)
            log.info(
                "tasks_loaded",
                location=self._source.location,
                task_count=len(tasks),
            )
            return True
        except TaskSourceError as e:
            log.warning(
                "task_load_failed",
                location=self._source.location,
                error=e.message,
                error_type=type(e).__name__,
            )
            if not store.closed:
                store.fail_load(e.message)
            return False
        except Exception as e:
            log.error(
                "task_load_unexpected_error",
                location=self._source.location,
                error=str(e),
                error_type=type(e).__name__,
            )
            if not store.closed:
                store.fail_load(str(e) or DEFAULT_LOAD_ERROR)
            return False
        finally:
            if not store.closed:
                store.finish_load()


async def load_tasks(
    store: TaskStore,
    config: IngestConfig | None = None,
    source: TaskSource | None = None,
) -> bool:
    """按配置加载任务到 Store

    Args:
        store: 目标 Store
        config: 加载配置，None 时从环境变量读取
        source: 自定义数据源，None 时按 config.tasks_source 创建
    """
    cfg = config or load_ingest_config()
    loader = TaskLoader(
        source=source or create_source(cfg.tasks_source, timeout_s=cfg.timeout_s),
        fallback_count=cfg.fallback_count,
    )
    return await loader.load_into(store)
