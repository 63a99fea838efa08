#!/usr/bin/env python3

import os
import yaml
import logging
from typing import Dict, List, Any, Optional, Mapping
from dataclasses import dataclass, field, fields, replace

from rich.console import Console
from rich.table import Table

from ..errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY_MIRRORS = [
    "http://mirror.bebout.net/remi/",
    "http://repo1.sea.innoscale.net/remi/",
    "http://mirrors.mediatemple.net/remi/",
]

@dataclass(frozen=True)
class LocalizerConfig:
    arch: str = "x86_64"
    release_ver: str = "7"
    repos_dir: str = "/etc/yum.repos.d"
    dest_path: str = "./dest"
    bucket: str = "hoge"
    prefix: str = "/mirror-repo/"
    ignores: List[str] = field(default_factory=lambda: ["DEFAULT", "amzn"])
    base_path: str = "https://hoge.cloudfront.net"
    priority_mirrors: List[str] = field(default_factory=lambda: list(DEFAULT_PRIORITY_MIRRORS))
    # Seconds; None waits forever like a plain GET
    timeout: Optional[float] = None
    # Use the sync source for the rewritten baseurl instead of the first candidate
    consistent_pick: bool = False
    continue_on_error: bool = False

@dataclass(frozen=True)
class EnvOption:
    env: str
    field: str
    kind: str  # 'str', 'list', 'float' or 'bool'
    description: str

ENV_OPTIONS = [
    EnvOption("ARCH", "arch", "str", "Architecture substituted for $basearch"),
    EnvOption("RELEASEVER", "release_ver", "str", "Release version substituted for $releasever"),
    EnvOption("REPOSDIR", "repos_dir", "str", "Directory scanned for *.repo files"),
    EnvOption("DEST", "dest_path", "str", "Directory the rewritten files are written to"),
    EnvOption("BUCKET", "bucket", "str", "Bucket passed to the sync command"),
    EnvOption("PREFIX", "prefix", "str", "Path prefix of the mirrored repositories"),
    EnvOption("IGNORES", "ignores", "list", "Section name prefixes left untouched"),
    EnvOption("BASEPATH", "base_path", "str", "Public URL the mirror is served from"),
    EnvOption("PRIORITY_MIRRORS", "priority_mirrors", "list", "Preferred mirror URL prefixes"),
    EnvOption("TIMEOUT", "timeout", "float", "Mirrorlist request timeout in seconds"),
    EnvOption("CONSISTENT_PICK", "consistent_pick", "bool", "Rewrite baseurl from the synced mirror"),
    EnvOption("CONTINUE_ON_ERROR", "continue_on_error", "bool", "Keep going after a file fails"),
]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

def parse_list(value: Any) -> List[str]:
    """Comma separated string (or YAML list) to a list without empty items"""
    if isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    else:
        items = str(value).split(",")
    return [item.strip() for item in items if item.strip()]

def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean value {value!r}")

def parse_float(value: Any) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return float(value)

_PARSERS = {
    "str": lambda value: str(value),
    "list": parse_list,
    "bool": parse_bool,
    "float": parse_float,
}

class ConfigManager:
    def __init__(self, config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None):
        self.config_path = config_path
        self.environ = os.environ if environ is None else environ
        self._config: Optional[LocalizerConfig] = None

    def load_config(self) -> LocalizerConfig:
        if self._config is not None:
            return self._config

        values: Dict[str, Any] = {}
        if self.config_path:
            values.update(self._load_file())
        values.update(self._load_environment())

        self._config = replace(LocalizerConfig(), **values)
        logger.debug(f"Loaded configuration: {self._config}")
        return self._config

    def get_config(self) -> LocalizerConfig:
        if self._config is None:
            return self.load_config()
        return self._config

    def _load_file(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_path):
            raise ConfigError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config from {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {self.config_path} must contain a mapping")

        known = {f.name for f in fields(LocalizerConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown settings in {self.config_path}: {', '.join(unknown)}")

        kinds = {option.field: option.kind for option in ENV_OPTIONS}
        values = {}
        for name, raw in data.items():
            values[name] = self._convert(name, kinds[name], raw, self.config_path)
        return values

    def _load_environment(self) -> Dict[str, Any]:
        values = {}
        for option in ENV_OPTIONS:
            if option.env not in self.environ:
                continue
            raw = self.environ[option.env]
            values[option.field] = self._convert(option.field, option.kind, raw, f"${option.env}")
        return values

    def _convert(self, name: str, kind: str, raw: Any, source: str) -> Any:
        if raw is None and kind == "float":
            return None
        try:
            return _PARSERS[kind](raw)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value for {name} from {source}: {e}") from e

def print_usage(console: Optional[Console] = None) -> None:
    """Print the environment variables understood by repo-localizer"""
    console = console or Console()
    defaults = LocalizerConfig()

    table = Table(title="This application is configured via the environment.")
    table.add_column("KEY")
    table.add_column("TYPE")
    table.add_column("DEFAULT")
    table.add_column("DESCRIPTION")

    for option in ENV_OPTIONS:
        default = getattr(defaults, option.field)
        if isinstance(default, list):
            default = ",".join(default)
        elif default is None:
            default = ""
        table.add_row(option.env, option.kind, str(default), option.description)

    console.print(table)
