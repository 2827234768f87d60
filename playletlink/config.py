"""
Run configuration.

Values are layered: built-in defaults, then PLAYLET_* environment variables
(a .env file is loaded by the CLI first), then explicit overrides such as
command-line flags.
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError

DEFAULT_BASE_URL = "https://playlet-applet.dataeye.com/playlet/listHotRanking"
DEFAULT_DATASET_PATH = Path("短剧.csv")
DEFAULT_OUTPUT_PATH = Path("matching_results.json")

ENV_VARS = {
    "base_url": "PLAYLET_RANKING_URL",
    "page_id": "PLAYLET_PAGE_ID",
    "page_size": "PLAYLET_PAGE_SIZE",
    "month": "PLAYLET_MONTH",
    "dataset_path": "PLAYLET_DATASET",
    "output_path": "PLAYLET_OUTPUT",
}

INT_FIELDS = {"page_id", "page_size", "max_retries"}
FLOAT_FIELDS = {"timeout", "retry_delay"}
PATH_FIELDS = {"dataset_path", "output_path"}


@dataclass(frozen=True)
class RunConfig:
    base_url: str = DEFAULT_BASE_URL
    page_id: int = 1
    page_size: int = 30
    month: str = "2025-01"
    dataset_path: Path = DEFAULT_DATASET_PATH
    output_path: Path = DEFAULT_OUTPUT_PATH
    timeout: float = 15.0
    max_retries: int = 3
    retry_delay: float = 1.0

    def query_params(self) -> Dict[str, Any]:
        return {"pageId": self.page_id, "pageSize": self.page_size, "month": self.month}

    @classmethod
    def from_env(
        cls,
        overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "RunConfig":
        """
        Build a config from defaults, environment variables and overrides.

        Args:
            overrides: Field values that win over everything else; None values
                are treated as "not given"
            environ: Environment mapping (default: os.environ)

        Raises:
            ConfigError: If a value for an integer field is not an integer
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        for name, var in ENV_VARS.items():
            raw = environ.get(var)
            if raw is not None and raw.strip():
                values[name] = raw.strip()

        for name, value in (overrides or {}).items():
            if value is not None:
                values[name] = value

        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigError(f"Unknown config field(s): {', '.join(sorted(unknown))}")

        return replace(cls(), **{k: _coerce(k, v) for k, v in values.items()})


def _coerce(name: str, value: Any) -> Any:
    if name in INT_FIELDS:
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"Config value '{name}' must be an integer, got {value!r}")
    if name in PATH_FIELDS:
        return Path(value)
    if name in FLOAT_FIELDS:
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ConfigError(f"Config value '{name}' must be a number, got {value!r}")
    return str(value)
