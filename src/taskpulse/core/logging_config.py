"""TaskPulse 日志初始化

CLI 与测试共用同一套 structlog 处理链：
本地排查时用彩色控制台输出，接入日志采集时切换为单行 JSON（保留中文原文）。
参数优先，未传入时读取 TASKPULSE_LOG_FORMAT / TASKPULSE_LOG_LEVEL。
"""

import logging
import os

import structlog


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """初始化 structlog 并桥接到标准库 logging

    Args:
        log_format: "dev"（默认）或 "json"，未知值按 dev 处理
        log_level: 标准库日志级别名，未知值按 INFO 处理
    """
    log_format = log_format or os.environ.get("TASKPULSE_LOG_FORMAT", "dev")
    log_level = log_level or os.environ.get("TASKPULSE_LOG_LEVEL", "INFO")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(log_format),
            foreign_pre_chain=shared_processors,
        )
    )

    # 重复调用时替换而不是叠加 handler
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
