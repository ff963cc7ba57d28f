from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from playoff_pool.domain.errors import ConfigError
from playoff_pool.domain.result import Err, Ok, Result
from playoff_pool.ingest.espn_source import ESPN_BASE_URL
from playoff_pool.ingest.sleeper_source import SLEEPER_BASE_URL, SLEEPER_PROJECTIONS_URL

_DEFAULTS: dict[str, object] = {
    "data": {"dir": "./data"},
    "admin": {"token": ""},
    "draft": {"default_rounds": 8},
    "espn": {"base_url": ESPN_BASE_URL},
    "sleeper": {"base_url": SLEEPER_BASE_URL, "projections_url": SLEEPER_PROJECTIONS_URL},
    "http": {"timeout": 10.0},
    "server": {"host": "127.0.0.1", "port": 5000, "pool_size": 5},
}

_SECTIONS = frozenset(_DEFAULTS)


@dataclass(frozen=True)
class PoolSettings:
    data_dir: Path
    admin_token: str
    default_rounds: int
    espn_base_url: str
    sleeper_base_url: str
    sleeper_projections_url: str
    http_timeout: float
    server_host: str
    server_port: int
    server_pool_size: int

    @property
    def db_path(self) -> Path:
        return self.data_dir / "pool.db"


def create_config(
    yaml_path: str = "pool.yaml",
    env_prefix: str = "POOL",
    defaults: dict[str, object] | None = None,
    *,
    data_dir: str | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.
    Environment variables use ``__`` between levels, e.g. ``POOL__ADMIN__TOKEN``.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if data_dir is not None:
        layers.insert(0, config_from_dict({"data": {"dir": data_dir}}))

    return ConfigurationSet(*layers)


def load_settings(cfg: ConfigurationSet | None = None) -> Result[PoolSettings, ConfigError]:
    if cfg is None:
        cfg = create_config()

    sections = {str(key).split(".")[0] for key in cfg.as_dict()}
    unrecognized = tuple(sorted(sections - _SECTIONS))
    if unrecognized:
        return Err(ConfigError(f"Unrecognized configuration sections: {', '.join(unrecognized)}", unrecognized))

    try:
        settings = PoolSettings(
            data_dir=Path(str(cfg["data.dir"])).expanduser(),
            admin_token=str(cfg["admin.token"] or ""),
            default_rounds=int(str(cfg["draft.default_rounds"])),
            espn_base_url=str(cfg["espn.base_url"]),
            sleeper_base_url=str(cfg["sleeper.base_url"]),
            sleeper_projections_url=str(cfg["sleeper.projections_url"]),
            http_timeout=float(str(cfg["http.timeout"])),
            server_host=str(cfg["server.host"]),
            server_port=int(str(cfg["server.port"])),
            server_pool_size=int(str(cfg["server.pool_size"])),
        )
    except (KeyError, ValueError) as exc:
        return Err(ConfigError(f"Invalid configuration: {exc}"))

    if settings.default_rounds < 1:
        return Err(ConfigError("draft.default_rounds must be at least 1"))
    if settings.server_pool_size < 1:
        return Err(ConfigError("server.pool_size must be at least 1"))
    return Ok(settings)
