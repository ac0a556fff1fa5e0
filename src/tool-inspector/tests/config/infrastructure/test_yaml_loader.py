"""Tests for YAML config loading infrastructure."""

from pathlib import Path

import pytest

from tests.config.fake_observer import FakeConfigObserver
from tool_inspector.config.domain.mcp_server import HttpMcpServer, StdioMcpServer
from tool_inspector.config.domain.model import DEFAULT_SYSTEM_PROMPT
from tool_inspector.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)
from tool_inspector.config.infrastructure.yaml_loader import YamlConfigLoader

# __file__ is tests/config/infrastructure/test_yaml_loader.py
FIXTURES = Path(__file__).parent.parent.parent / "fixtures"


def _fixture(name: str) -> Path:
    return FIXTURES / name


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
    monkeypatch.setenv("MCP_TOKEN", "token123")
    monkeypatch.delenv("WEATHER_UNITS", raising=False)
    monkeypatch.delenv("MCP_URL", raising=False)
    return monkeypatch


class TestValidConfigLoading:
    """A valid YAML config loads with env vars and defaults resolved."""

    def test_loads_name_and_model(self, env: pytest.MonkeyPatch) -> None:
        cfg = YamlConfigLoader(FakeConfigObserver()).load(_fixture("valid_stdio.yaml"))

        assert cfg.name == "weather-inspector"
        assert cfg.model.model == "claude-3-5-sonnet-20241022"
        assert cfg.model.api_key == "sk-test"
        assert cfg.model.max_tokens == 2048
        assert cfg.model.system_prompt == DEFAULT_SYSTEM_PROMPT

    def test_loads_stdio_server_with_default_env(self, env: pytest.MonkeyPatch) -> None:
        cfg = YamlConfigLoader(FakeConfigObserver()).load(_fixture("valid_stdio.yaml"))

        assert isinstance(cfg.mcp_server, StdioMcpServer)
        assert cfg.mcp_server.command == "python"
        assert cfg.mcp_server.args == ["-m", "weather_server"]
        assert cfg.mcp_server.env == {"WEATHER_UNITS": "metric"}

    def test_set_env_var_overrides_default(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("WEATHER_UNITS", "imperial")

        cfg = YamlConfigLoader(FakeConfigObserver()).load(_fixture("valid_stdio.yaml"))

        assert isinstance(cfg.mcp_server, StdioMcpServer)
        assert cfg.mcp_server.env == {"WEATHER_UNITS": "imperial"}

    def test_loads_http_server_with_interpolated_header(
        self, env: pytest.MonkeyPatch
    ) -> None:
        cfg = YamlConfigLoader(FakeConfigObserver()).load(_fixture("valid_http.yaml"))

        assert isinstance(cfg.mcp_server, HttpMcpServer)
        assert cfg.mcp_server.url == "http://localhost:8000/mcp"
        assert cfg.mcp_server.headers == {"Authorization": "Bearer token123"}
        assert cfg.model.max_tokens == 1024

    def test_emits_config_loaded_event(self, env: pytest.MonkeyPatch) -> None:
        observer = FakeConfigObserver()

        YamlConfigLoader(observer).load(_fixture("valid_http.yaml"))

        assert observer.loaded == [
            {
                "name": "remote-inspector",
                "server_type": "http",
                "model": "claude-3-5-sonnet-20241022",
            }
        ]

    def test_emits_default_used_event(self, env: pytest.MonkeyPatch) -> None:
        observer = FakeConfigObserver()

        YamlConfigLoader(observer).load(_fixture("valid_http.yaml"))

        assert observer.defaults_used == ["MCP_URL"]

    def test_api_key_is_not_in_repr(self, env: pytest.MonkeyPatch) -> None:
        cfg = YamlConfigLoader(FakeConfigObserver()).load(_fixture("valid_http.yaml"))

        assert "sk-test" not in repr(cfg)


class TestLoadFailures:
    def test_missing_env_vars_are_all_reported(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("UNSET_MODEL_KEY", raising=False)
        monkeypatch.delenv("UNSET_SERVER_TOKEN", raising=False)
        observer = FakeConfigObserver()

        with pytest.raises(MissingEnvVarsError) as exc_info:
            YamlConfigLoader(observer).load(_fixture("missing_env_vars.yaml"))

        assert exc_info.value.missing_vars == ["UNSET_MODEL_KEY", "UNSET_SERVER_TOKEN"]
        assert "UNSET_MODEL_KEY, UNSET_SERVER_TOKEN" in str(exc_info.value)
        assert observer.loaded == []

    def test_unknown_server_type_fails_validation(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            YamlConfigLoader(FakeConfigObserver()).load(_fixture("invalid_schema.yaml"))

        assert str(exc_info.value).startswith("Failed to validate config")

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "absent.yaml"

        with pytest.raises(ConfigLoadError) as exc_info:
            YamlConfigLoader(FakeConfigObserver()).load(path)

        assert exc_info.value.path == path
        assert "file not found" in str(exc_info.value)

    def test_invalid_yaml(self) -> None:
        with pytest.raises(ConfigLoadError) as exc_info:
            YamlConfigLoader(FakeConfigObserver()).load(_fixture("invalid_yaml.yaml"))

        assert "invalid YAML" in str(exc_info.value)

    def test_top_level_must_be_a_mapping(self) -> None:
        with pytest.raises(ConfigLoadError) as exc_info:
            YamlConfigLoader(FakeConfigObserver()).load(_fixture("not_a_mapping.yaml"))

        assert "top-level mapping expected" in str(exc_info.value)

    def test_non_positive_max_tokens_fails_validation(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "name: x\n"
            "model: {model: m, api_key: k, max_tokens: 0}\n"
            "mcp_server: {type: stdio, command: server}\n",
            encoding="utf-8",
        )

        with pytest.raises(ConfigValidationError):
            YamlConfigLoader(FakeConfigObserver()).load(path)
