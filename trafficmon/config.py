"""Monitor settings: defaults, YAML file loading, validation."""

from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from trafficmon.driver import DEFAULT_TOP_N, ErrorPolicy
from trafficmon.errors import ConfigurationError
from trafficmon.span import Span

# Types accepted per key.  threshold also takes ints ("threshold: 100").
_TYPES = {
    "segment_seconds": (int,),
    "span_seconds": (int,),
    "threshold": (int, float),
    "top_n": (int,),
    "on_error": (str,),
}


@dataclass(frozen=True)
class MonitorConfig:
    segment_seconds: int = 10
    span_seconds: int = 120
    threshold: float = 100.0
    top_n: int = DEFAULT_TOP_N
    on_error: str = ErrorPolicy.ABORT.value

    @property
    def error_policy(self) -> ErrorPolicy:
        return ErrorPolicy(self.on_error)

    def override(self, **values) -> "MonitorConfig":
        """Copy with every non-None value replaced (CLI flags over file)."""
        changes = {k: v for k, v in values.items() if v is not None}
        return validate(replace(self, **changes))


def validate(config: MonitorConfig, source: str = "config") -> MonitorConfig:
    try:
        Span(config.segment_seconds, config.span_seconds, config.threshold)
    except ConfigurationError as e:
        raise ConfigurationError(f"{source}: {e}") from None
    if config.top_n < 0:
        raise ConfigurationError(f"{source}: top_n must not be negative, got {config.top_n}")
    try:
        ErrorPolicy(config.on_error)
    except ValueError:
        allowed = ", ".join(p.value for p in ErrorPolicy)
        raise ConfigurationError(
            f"{source}: on_error must be one of {allowed}, got '{config.on_error}'"
        ) from None
    return config


def load_config(path: str | Path) -> MonitorConfig:
    """Read a YAML settings file.  Missing keys keep their defaults."""
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"config file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"{path.name}: invalid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path.name}: expected a mapping at top level")

    known = {f.name for f in fields(MonitorConfig)}
    for key, value in data.items():
        if key not in known:
            raise ConfigurationError(f"{path.name}: unknown setting '{key}'")
        # bool is an int subclass; "segment_seconds: yes" is still a mistake
        if isinstance(value, bool) or not isinstance(value, _TYPES[key]):
            raise ConfigurationError(
                f"{path.name}: '{key}' has wrong type {type(value).__name__}"
            )

    if "threshold" in data:
        data["threshold"] = float(data["threshold"])
    return validate(MonitorConfig(**data), source=path.name)
