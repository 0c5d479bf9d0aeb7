"""psquote configuration: dialect overrides and logging settings."""

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

import structlog

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from psquote.core.chars import POWERSHELL, Dialect

USER_CONFIG = Path.home() / ".psquote" / "config.toml"
PROJECT_CONFIG_NAME = ".psquote.toml"
ENV_CONFIG = "PSQUOTE_CONFIG"


# Config scopes in priority order (lowest to highest)
SCOPE_USER = "user"
SCOPE_PROJECT = "project"
SCOPE_ENV = "env"

# Dialect fields that must be exactly one character
_SINGLE_CHAR_KEYS = frozenset({"escape", "sigil", "redirect_marker"})
_DIALECT_KEYS = frozenset(f.name for f in fields(Dialect)) | {"extra_token_breaks"}


@dataclass
class Config:
    """Parsed configuration."""

    dialect_overrides: dict[str, str] = field(default_factory=dict)
    """Dialect fields set by config files, applied over POWERSHELL."""

    log: Path | None = None  # None = no logging
    log_full: bool = False  # log the raw value (requires log path)
    sources: list[tuple[str, str]] = field(default_factory=list)
    """(scope, path) of every file that contributed, in load order."""

    def dialect(self) -> Dialect:
        """Build the effective Dialect."""
        overrides = dict(self.dialect_overrides)
        extra = overrides.pop("extra_token_breaks", "")
        dialect = replace(POWERSHELL, **overrides)
        if extra:
            dialect = replace(dialect, token_breaks=dialect.token_breaks + extra)
        return dialect


# === Config Loading ===


def _find_project_config(cwd: Path) -> Path | None:
    """Walk up from cwd to find .psquote.toml."""
    current = cwd.resolve()
    while True:
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:  # reached root
            return None
        current = parent


def _merge_configs(base: Config, overlay: Config) -> Config:
    """Merge overlay config into base. Dialect keys and settings override."""
    return replace(
        base,
        dialect_overrides={**base.dialect_overrides, **overlay.dialect_overrides},
        log=overlay.log if overlay.log is not None else base.log,
        log_full=overlay.log_full if overlay.log_full else base.log_full,
        sources=base.sources + overlay.sources,
    )


def _load_scope(config: Config, path: Path, scope: str) -> Config:
    overlay = parse_config(path.read_text(encoding="utf-8"), source=str(path))
    overlay.sources = [(scope, str(path))]
    return _merge_configs(config, overlay)


def load_config(cwd: Path) -> Config:
    """Load config from ~/.psquote/config.toml, .psquote.toml and $PSQUOTE_CONFIG."""
    config = Config()

    # 1. User config (lowest priority)
    if USER_CONFIG.is_file():
        config = _load_scope(config, USER_CONFIG, SCOPE_USER)

    # 2. Project config (walk up from cwd)
    project_path = _find_project_config(cwd)
    if project_path is not None:
        config = _load_scope(config, project_path, SCOPE_PROJECT)

    # 3. Env override (highest priority)
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        env_config_path = Path(env_path).expanduser()
        if env_config_path.is_file():
            config = _load_scope(config, env_config_path, SCOPE_ENV)

    return config


def parse_config(text: str, source: str = "<string>") -> Config:
    """Parse TOML config text into a Config. Raises ValueError on bad input."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"{source}: {e}") from None

    try:
        for table in data:
            if table not in ("dialect", "settings"):
                raise ValueError(f"unknown table [{table}]")
        overrides = _parse_dialect(data.get("dialect", {}))
        settings = _parse_settings(data.get("settings", {}))
    except ValueError as e:
        raise ValueError(f"{source}: {e}") from None

    return Config(
        dialect_overrides=overrides,
        log=settings.get("log"),
        log_full=settings.get("log_full", False),
    )


def _parse_dialect(table: dict) -> dict[str, str]:
    """Validate a [dialect] table. Raises ValueError on invalid entries."""
    overrides: dict[str, str] = {}
    for key, value in table.items():
        key_normalized = key.replace("-", "_")
        if key_normalized not in _DIALECT_KEYS:
            raise ValueError(f"unknown dialect key '{key}'")
        if not isinstance(value, str):
            raise ValueError(f"'{key}' must be a string")
        if key_normalized in _SINGLE_CHAR_KEYS and len(value) != 1:
            raise ValueError(f"'{key}' must be a single character, got {value!r}")
        if key_normalized == "redirect_digits" and not all(
            c in "0123456789" for c in value
        ):
            raise ValueError(f"'{key}' must contain only digits, got {value!r}")
        overrides[key_normalized] = value
    return overrides


def _parse_settings(table: dict) -> dict[str, bool | Path]:
    """Validate a [settings] table. Raises ValueError on invalid entries."""
    settings: dict[str, bool | Path] = {}
    for key, value in table.items():
        key_normalized = key.replace("-", "_")
        if key_normalized == "log":
            if not isinstance(value, str) or not value:
                raise ValueError("'log' requires a path")
            settings[key_normalized] = Path(value).expanduser()
        elif key_normalized == "log_full":
            if not isinstance(value, bool):
                raise ValueError(f"'{key}' must be true or false")
            settings[key_normalized] = value
        else:
            raise ValueError(f"unknown setting '{key}'")
    return settings


# === Logging ===

_logger: structlog.BoundLogger | None = None
_log_full = False
_log_file = None  # open handle behind _logger, closed on reconfigure


def configure_logging(config: Config) -> None:
    """Configure logging based on config settings. Call once at startup."""
    global _logger, _log_full, _log_file
    if _log_file is not None:
        _log_file.close()
        _log_file = None
    _logger = None
    _log_full = False
    if config.log is None:
        return

    # Ensure log directory exists
    config.log.parent.mkdir(parents=True, exist_ok=True)
    _log_file = config.log.open("a", encoding="utf-8")

    # JSON lines appended to the configured file
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.WriteLoggerFactory(file=_log_file),
        cache_logger_on_first_use=False,
    )
    _logger = structlog.get_logger()
    _log_full = config.log_full


def log_operation(
    op: str,
    result_len: int,
    violation: str | None = None,
    value: str | None = None,
) -> None:
    """Log one operation. No-op if logging not configured."""
    if _logger is None:
        return
    entry: dict[str, str | int] = {"op": op, "result_len": result_len}
    if violation is not None:
        entry["violation"] = violation
    if _log_full and value is not None:
        entry["value"] = value
    _logger.info("operation", **entry)
