import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

import yaml
from dotenv import load_dotenv

DEFAULT_API_URL = "https://api.sendforsign.com/api"
DEFAULT_API_PATHS = {
    "template": "/template",
    "placeholder": "/placeholder",
    "contract": "/contract",
}
HTTP_MODE_FLAGS = ("CLOUD_SERVICE", "SSE_LOCAL", "HTTP_STREAMABLE_SERVER")


CONFIG_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "config.yaml"))


def load_config_file(path: Optional[str] = None) -> dict:
    """Read config.yaml (project root by default); a missing file yields an empty dict."""
    config_path = path or CONFIG_PATH
    if not os.path.isfile(config_path):
        return {}
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


@dataclass(frozen=True)
class ServerConfig:
    """Process-wide settings, built once at startup and passed around explicitly."""

    api_key: Optional[str] = field(default=None, repr=False)
    client_key: Optional[str] = field(default=None, repr=False)
    http_mode: bool = False
    host: str = "localhost"
    port: int = 3000
    timeout: float = 30.0
    api_url: str = DEFAULT_API_URL
    api_paths: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_API_PATHS))
    health_path: str = "/health"
    server_name: str = "mcp-sfs"
    instructions: Optional[str] = None


def _flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "").strip().lower() == "true"


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def load_server_config(
    env: Optional[Mapping[str, str]] = None,
    file_config: Optional[dict] = None,
) -> ServerConfig:
    """Build a ServerConfig from config.yaml and the process environment.

    When `env` is omitted, a `.env` file is loaded first and `os.environ` is used.
    Raises ValueError for a non-numeric PORT or timeout.
    """
    if env is None:
        load_dotenv()
        env = os.environ
    if file_config is None:
        file_config = load_config_file()

    cloud = _flag(env, "CLOUD_SERVICE")
    http_mode = any(_flag(env, name) for name in HTTP_MODE_FLAGS)
    host = "0.0.0.0" if cloud else (_blank_to_none(env.get("HOST")) or "localhost")

    raw_port = env.get("PORT") or file_config.get("port") or 3000
    try:
        port = int(raw_port)
    except (TypeError, ValueError):
        raise ValueError(f"PORT must be an integer, got {raw_port!r}")

    raw_timeout = env.get("SFS_TIMEOUT") or file_config.get("request_timeout") or 30.0
    try:
        timeout = float(raw_timeout)
    except (TypeError, ValueError):
        raise ValueError(f"SFS_TIMEOUT must be a number of seconds, got {raw_timeout!r}")
    if timeout <= 0:
        raise ValueError(f"SFS_TIMEOUT must be positive, got {timeout}")

    api_url = _blank_to_none(env.get("SFS_API_URL")) or file_config.get("sendforsign_api_url") or DEFAULT_API_URL
    api_paths = dict(DEFAULT_API_PATHS)
    api_paths.update(file_config.get("api_paths") or {})

    return ServerConfig(
        api_key=_blank_to_none(env.get("SFS_API_KEY")),
        client_key=_blank_to_none(env.get("SFS_CLIENT_KEY")),
        http_mode=http_mode,
        host=host,
        port=port,
        timeout=timeout,
        api_url=api_url.rstrip("/"),
        api_paths=api_paths,
        health_path=file_config.get("health_path", "/health"),
        server_name=file_config.get("server_name", "mcp-sfs"),
        instructions=file_config.get("instructions"),
    )
