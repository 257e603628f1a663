"""IngestConfig + load_ingest_config 单元测试

验证环境变量映射、默认值与非法值回退。
"""

import pytest
from pydantic import ValidationError
from taskpulse.ingest.config import IngestConfig, load_ingest_config

_ENV_VARS = [
    "TASKPULSE_TASKS_SOURCE",
    "TASKPULSE_SOURCE_TIMEOUT_S",
    "TASKPULSE_FALLBACK_COUNT",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestIngestConfig:
    """IngestConfig 数据模型测试"""

    def test_default_values(self):
        config = IngestConfig()
        assert config.tasks_source == "data/tasks.json"
        assert config.timeout_s == 10
        assert config.fallback_count == 50

    def test_fallback_count_min_value(self):
        with pytest.raises(ValidationError):
            IngestConfig(fallback_count=0)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            IngestConfig(timeout_s=0)


class TestLoadIngestConfig:
    """load_ingest_config() 环境变量映射测试"""

    def test_default_when_no_env(self):
        assert load_ingest_config() == IngestConfig()

    def test_values_from_env(self, monkeypatch):
        monkeypatch.setenv("TASKPULSE_TASKS_SOURCE", "https://example.com/tasks.json")
        monkeypatch.setenv("TASKPULSE_SOURCE_TIMEOUT_S", "2.5")
        monkeypatch.setenv("TASKPULSE_FALLBACK_COUNT", "20")

        config = load_ingest_config()
        assert config.tasks_source == "https://example.com/tasks.json"
        assert config.timeout_s == 2.5
        assert config.fallback_count == 20

    @pytest.mark.parametrize("value", ["abc", "0", "-3", "nan"])
    def test_invalid_timeout_uses_default(self, monkeypatch, value):
        monkeypatch.setenv("TASKPULSE_SOURCE_TIMEOUT_S", value)
        assert load_ingest_config().timeout_s == 10

    @pytest.mark.parametrize("value", ["many", "0", "2.5"])
    def test_invalid_fallback_count_uses_default(self, monkeypatch, value):
        monkeypatch.setenv("TASKPULSE_FALLBACK_COUNT", value)
        assert load_ingest_config().fallback_count == 50
