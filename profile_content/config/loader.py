from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from ..notion.client import DEFAULT_API_VERSION, DEFAULT_BASE_URL, DEFAULT_TIMEOUT

"""Config loader.

Responsibilities:
- Load the optional YAML config (config/profile.yml)
- Validate it against the bundled JSON schema
- Overlay environment variables (NOTION_TOKEN etc.), which take precedence
- Apply defaults (api version, timeout, server host/port)

Credentials are resolved here once and passed explicitly to the client; the
normalization code never reads the environment.
"""

if TYPE_CHECKING:
    import jsonschema
    from jsonschema.exceptions import ValidationError
else:
    try:
        import jsonschema
        from jsonschema.exceptions import ValidationError
    except ImportError:  # pragma: no cover
        jsonschema = None  # type: ignore[assignment]
        ValidationError = Exception  # type: ignore[misc,assignment]


SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/profile.yml")

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000

ENV_TOKEN = "NOTION_TOKEN"
ENV_DATABASE_ID = "NOTION_DATABASE_ID"
ENV_API_VERSION = "NOTION_VERSION"
ENV_TIMEOUT = "NOTION_TIMEOUT"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class NotionConfig:
    token: str | None
    database_id: str | None
    api_version: str = DEFAULT_API_VERSION
    timeout: float = DEFAULT_TIMEOUT
    base_url: str = DEFAULT_BASE_URL

    @property
    def has_credentials(self) -> bool:
        return bool(self.token) and bool(self.database_id)


@dataclass(frozen=True)
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


@dataclass(frozen=True)
class AppConfig:
    notion: NotionConfig
    server: ServerConfig

    def require_credentials(self) -> NotionConfig:
        """Return the Notion config or raise ConfigError when secrets are missing."""
        missing = []
        if not self.notion.token:
            missing.append(ENV_TOKEN)
        if not self.notion.database_id:
            missing.append(ENV_DATABASE_ID)
        if missing:
            raise ConfigError(f"missing Notion credentials: {', '.join(missing)}")
        return self.notion


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If jsonschema is unavailable, the schema file is missing
            or invalid, or the data violates the schema.
    """
    if jsonschema is None:
        raise ConfigError("jsonschema library is required for config validation")

    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    return data


def _env_timeout(env: Mapping[str, str], fallback: float) -> float:
    raw = env.get(ENV_TIMEOUT)
    if not raw:
        return fallback
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ConfigError(f"{ENV_TIMEOUT} must be a number: {raw!r}") from e
    if timeout <= 0:
        raise ConfigError(f"{ENV_TIMEOUT} must be positive: {raw!r}")
    return timeout


def load_config(path: Path | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    """Build the application config from YAML (optional) and the environment.

    Args:
        path: YAML config path. A missing file is not an error; an explicitly
            broken one is.
        env: Environment mapping (defaults to os.environ).
    """
    env = os.environ if env is None else env
    data: dict[str, Any] = {}
    if path is not None and path.exists():
        data = _read_yaml(path)
        _validate_config_schema(data)

    notion_raw = data.get("notion") or {}
    server_raw = data.get("server") or {}

    notion = NotionConfig(
        token=env.get(ENV_TOKEN) or notion_raw.get("token"),
        database_id=env.get(ENV_DATABASE_ID) or notion_raw.get("database_id"),
        api_version=env.get(ENV_API_VERSION) or notion_raw.get("api_version", DEFAULT_API_VERSION),
        timeout=_env_timeout(env, float(notion_raw.get("timeout", DEFAULT_TIMEOUT))),
        base_url=notion_raw.get("base_url", DEFAULT_BASE_URL),
    )
    server = ServerConfig(
        host=server_raw.get("host", DEFAULT_HOST),
        port=server_raw.get("port", DEFAULT_PORT),
    )
    return AppConfig(notion=notion, server=server)
