"""任务数据源单元测试

测试内容：
1. HttpTaskSource：成功、非 2xx、连接失败、非法 JSON、非数组
2. FileTaskSource：成功、文件不存在
3. create_source 按 scheme 选择实现
"""

import json

import httpx
import pytest
from taskpulse.ingest.exceptions import (
    MalformedSourceError,
    SourceStatusError,
    SourceUnreachableError,
    TaskSourceError,
)
from taskpulse.ingest.sources import (
    FileTaskSource,
    HttpTaskSource,
    create_source,
    parse_records,
)

URL = "http://tasks.test/tasks.json"


def _source(handler) -> HttpTaskSource:
    return HttpTaskSource(URL, timeout_s=5, transport=httpx.MockTransport(handler))


class TestParseRecords:
    """parse_records() 测试"""

    def test_array_of_objects(self):
        assert parse_records("x", '[{"title": "a"}, {}]') == [{"title": "a"}, {}]

    def test_empty_array(self):
        assert parse_records("x", "[]") == []

    def test_invalid_json(self):
        with pytest.raises(MalformedSourceError):
            parse_records("x", "[{")

    def test_not_an_array(self):
        with pytest.raises(MalformedSourceError):
            parse_records("x", '{"tasks": []}')

    def test_non_object_record(self):
        with pytest.raises(MalformedSourceError) as exc_info:
            parse_records("x", '[{}, 3]')
        assert "1" in exc_info.value.reason


class TestHttpTaskSource:
    """HttpTaskSource 测试"""

    async def test_fetch_success(self):
        payload = [{"title": "a", "revenue": 10}]
        source = _source(lambda request: httpx.Response(200, json=payload))
        assert await source.fetch() == payload

    async def test_request_targets_url(self):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json=[])

        await _source(handler).fetch()
        assert seen == [URL]

    async def test_non_2xx_raises_status_error(self):
        source = _source(lambda request: httpx.Response(404))
        with pytest.raises(SourceStatusError) as exc_info:
            await source.fetch()
        assert exc_info.value.status_code == 404
        assert "404" in exc_info.value.message

    async def test_connection_error_raises_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(SourceUnreachableError) as exc_info:
            await _source(handler).fetch()
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    async def test_timeout_raises_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(SourceUnreachableError):
            await _source(handler).fetch()

    async def test_invalid_json_raises_malformed(self):
        source = _source(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(MalformedSourceError):
            await source.fetch()

    async def test_all_errors_share_base(self):
        source = _source(lambda request: httpx.Response(500))
        with pytest.raises(TaskSourceError) as exc_info:
            await source.fetch()
        assert exc_info.value.recoverable is True


class TestFileTaskSource:
    """FileTaskSource 测试"""

    async def test_fetch_success(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([{"title": "from file"}]), encoding="utf-8")
        assert await FileTaskSource(path).fetch() == [{"title": "from file"}]

    async def test_missing_file(self, tmp_path):
        with pytest.raises(SourceUnreachableError):
            await FileTaskSource(tmp_path / "missing.json").fetch()

    async def test_malformed_file(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text("not json", encoding="utf-8")
        with pytest.raises(MalformedSourceError):
            await FileTaskSource(path).fetch()


class TestCreateSource:
    """create_source() 测试"""

    def test_http(self):
        assert isinstance(create_source("https://example.com/t.json"), HttpTaskSource)

    def test_file(self):
        source = create_source("data/tasks.json")
        assert isinstance(source, FileTaskSource)
        assert source.location == "data/tasks.json"
