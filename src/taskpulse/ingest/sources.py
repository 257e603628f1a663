"""任务数据源 -- HTTP / 本地 JSON 文件

数据源只负责取回原始记录数组，不做字段级兜底。
连接失败、非 2xx、非法 JSON、非数组内容统一抛出 TaskSourceError 子类。
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Protocol

import httpx
import structlog

from .exceptions import MalformedSourceError, SourceStatusError, SourceUnreachableError

log = structlog.get_logger()


class TaskSource(Protocol):
    """任务数据源接口"""

    location: str

    async def fetch(self) -> list[dict[str, Any]]:
        """取回原始任务记录数组"""
        ...


def parse_records(location: str, text: str) -> list[dict[str, Any]]:
    """解析 JSON 文本为记录数组

    Raises:
        MalformedSourceError: 非法 JSON、非数组或数组元素不是对象
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedSourceError(location, f"JSON 解析失败: {e}") from e

    if not isinstance(data, list):
        raise MalformedSourceError(location, f"期望数组，实际为 {type(data).__name__}")

    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise MalformedSourceError(
                location,
                f"第 {index} 条记录不是对象: {type(record).__name__}",
            )
    return data


class HttpTaskSource:
    """HTTP 数据源（GET 返回 JSON 数组）"""

    def __init__(
        self,
        url: str,
        timeout_s: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            url: 数据源地址
            timeout_s: 请求超时（秒）
            transport: 自定义 httpx transport（测试时注入 MockTransport）
        """
        self.location = url
        self._timeout_s = timeout_s
        self._transport = transport

    async def fetch(self) -> list[dict[str, Any]]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_s,
                transport=self._transport,
            ) as client:
                resp = await client.get(self.location)
        except httpx.HTTPError as e:
            raise SourceUnreachableError(self.location, e) from e

        if not resp.is_success:
            raise SourceStatusError(self.location, resp.status_code)

        records = parse_records(self.location, resp.text)
        log.debug("task_source_fetched", location=self.location, record_count=len(records))
        return records


class FileTaskSource:
    """本地 JSON 文件数据源"""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self.location = str(self._path)

    async def fetch(self) -> list[dict[str, Any]]:
        try:
            text = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedSourceError(self.location, f"编码错误: {e}") from e
        except OSError as e:
            raise SourceUnreachableError(self.location, e) from e

        records = parse_records(self.location, text)
        log.debug("task_source_fetched", location=self.location, record_count=len(records))
        return records


def create_source(location: str, timeout_s: float = 10) -> TaskSource:
    """按 URL scheme 选择数据源实现"""
    if location.startswith(("http://", "https://")):
        return HttpTaskSource(location, timeout_s=timeout_s)
    return FileTaskSource(location)
