"""IngestConfig -- 加载配置

从环境变量加载配置，非法值记录警告后使用默认值，不阻塞启动。
"""

import os
from collections.abc import Callable

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()


class IngestConfig(BaseModel):
    """加载配置 -- 从环境变量加载

    环境变量:
        TASKPULSE_TASKS_SOURCE: 任务数据源（URL 或本地 JSON 文件路径）
        TASKPULSE_SOURCE_TIMEOUT_S: HTTP 超时（秒，默认 10）
        TASKPULSE_FALLBACK_COUNT: 数据源为空时生成的示例任务数（默认 50）
    """

    tasks_source: str = Field(
        default="data/tasks.json",
        description="任务数据源 URL 或文件路径",
    )
    timeout_s: float = Field(
        default=10,
        gt=0,
        description="HTTP 请求超时（秒）",
    )
    fallback_count: int = Field(
        default=50,
        ge=1,
        description="数据源为空时生成的示例任务数",
    )


def _read_number(
    env_var: str,
    cast: Callable[[str], float],
    minimum: float,
    fallback: float,
) -> float | None:
    val = os.environ.get(env_var)
    if not val:
        return None
    try:
        number = cast(val)
    except ValueError:
        number = None
    if number is None or not number >= minimum:
        log.warning(
            "invalid_ingest_config",
            env_var=env_var,
            value=val,
            fallback=fallback,
        )
        return None
    return number


def load_ingest_config() -> IngestConfig:
    """从环境变量加载 IngestConfig

    环境变量映射:
        TASKPULSE_TASKS_SOURCE -> tasks_source (默认 "data/tasks.json")
        TASKPULSE_SOURCE_TIMEOUT_S -> timeout_s (默认 10)
        TASKPULSE_FALLBACK_COUNT -> fallback_count (默认 50)

    Returns:
        IngestConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKPULSE_TASKS_SOURCE"):
        kwargs["tasks_source"] = val

    timeout_s = _read_number("TASKPULSE_SOURCE_TIMEOUT_S", float, 1, 10)
    if timeout_s is not None:
        kwargs["timeout_s"] = timeout_s

    fallback_count = _read_number("TASKPULSE_FALLBACK_COUNT", int, 1, 50)
    if fallback_count is not None:
        kwargs["fallback_count"] = fallback_count

    return IngestConfig(**kwargs)
