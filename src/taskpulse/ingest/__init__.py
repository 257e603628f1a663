"""TaskPulse Ingest -- 任务数据加载层

数据源、标准化、降级生成器与加载器的公开接口导出。
"""

from .config import IngestConfig, load_ingest_config
from .exceptions import (
    MalformedSourceError,
    SourceStatusError,
    SourceUnreachableError,
    TaskSourceError,
)
from .loader import TaskLoader, load_tasks
from .normalize import normalize_task, normalize_tasks
from .seed import generate_sales_tasks
from .sources import FileTaskSource, HttpTaskSource, TaskSource, create_source

__all__ = [
    # 配置
    "IngestConfig",
    "load_ingest_config",
    # 数据源
    "TaskSource",
    "HttpTaskSource",
    "FileTaskSource",
    "create_source",
    # 标准化 / 降级
    "normalize_task",
    "normalize_tasks",
    "generate_sales_tasks",
    # 加载
    "TaskLoader",
    "load_tasks",
    # 异常
    "TaskSourceError",
    "SourceUnreachableError",
    "SourceStatusError",
    "MalformedSourceError",
]
