"""Application configuration: config.yaml, FIGHTDATA_* env overrides, defaults."""

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from urllib.parse import urlparse

import yaml

from fightdata.fetch import REQUEST_TIMEOUT, RESULTS_URL
from fightdata.process import BUFFER_SIZE, COLLECT_TIMEOUT, ITEM_TIMEOUT
from fightdata.util import ConfigError

logger = logging.getLogger(__name__)

CONFIG_NAME = "config.yaml"
ENV_PREFIX = "FIGHTDATA_"
SEARCH_PATHS = [Path("."), Path("config"), Path.home() / ".fightdata"]


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: str = "8080"  # "8080" or ":8080"

    @property
    def port_number(self) -> int:
        return int(self.port.lstrip(":"))


@dataclass(frozen=True)
class ParserConfig:
    base_url: str = RESULTS_URL
    request_timeout: float = REQUEST_TIMEOUT
    buffer_size: int = BUFFER_SIZE
    item_timeout: float = ITEM_TIMEOUT
    collect_timeout: float = COLLECT_TIMEOUT


@dataclass(frozen=True)
class Settings:
    server: ServerConfig = field(default_factory=ServerConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    static_dir: str = "frontend"


def find_config_file(search_paths: list[Path] | None = None) -> Path | None:
    for directory in search_paths or SEARCH_PATHS:
        candidate = directory / CONFIG_NAME
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    """Load settings from YAML, then apply environment overrides and validate.

    Without an explicit ``path`` the search paths are tried in order; no
    file at all means defaults. ``FIGHTDATA_SERVER_PORT`` overrides
    ``server.port``, ``FIGHTDATA_PARSER_BASE_URL`` overrides
    ``parser.base_url``, and so on.
    """
    environ = os.environ if environ is None else environ

    if path is None:
        path = find_config_file()
        if path is None:
            logger.warning("Config file not found, using default values")
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    raw: dict = {}
    if path is not None:
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"error reading config file {path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"config file {path} must contain a mapping")
        logger.info("Config file loaded: %s", path)

    server = _build_section(ServerConfig, raw.get("server"), "server", environ)
    parser = _build_section(ParserConfig, raw.get("parser"), "parser", environ)
    static_dir = str(environ.get(f"{ENV_PREFIX}STATIC_DIR", raw.get("static_dir", "frontend")))

    settings = Settings(server=server, parser=parser, static_dir=static_dir)
    validate_config(settings)
    logger.info("Configuration loaded, server port %s", settings.server.port)
    return settings


def _build_section(cls, values, section: str, environ):
    if values is None:
        values = {}
    if not isinstance(values, dict):
        raise ConfigError(f"config section {section!r} must be a mapping")

    obj = cls()
    known = {f.name: f for f in fields(cls)}
    unknown = set(values) - set(known)
    if unknown:
        logger.warning("Ignoring unknown %s keys: %s", section, ", ".join(sorted(unknown)))

    updates = {}
    for name in known:
        env_key = f"{ENV_PREFIX}{section.upper()}_{name.upper()}"
        if env_key in environ:
            value = environ[env_key]
        elif name in values:
            value = values[name]
        else:
            continue
        updates[name] = _coerce(value, known[name].type, f"{section}.{name}")
    return replace(obj, **updates)


def _coerce(value, target: type, key: str):
    try:
        return target(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid value for {key}: {value!r}") from e


def validate_config(settings: Settings) -> None:
    port = settings.server.port
    if not port:
        raise ConfigError("server port is required")
    if not is_valid_port(port):
        raise ConfigError(f"invalid server port format: {port}")

    parsed = urlparse(settings.parser.base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"invalid parser base_url: {settings.parser.base_url}")

    p = settings.parser
    for name in ("request_timeout", "buffer_size", "item_timeout", "collect_timeout"):
        if getattr(p, name) <= 0:
            raise ConfigError(f"parser.{name} must be positive")


def is_valid_port(port: str) -> bool:
    """Accept "8080" or ":8080" with a number in 1-65535."""
    digits = port[1:] if port.startswith(":") else port
    if not digits.isdigit():
        return False
    return 1 <= int(digits) <= 65535
