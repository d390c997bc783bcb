# src/stackcalc/config.py
"""Process-wide settings for the evaluator, runner and CLI.

Values come from keyword defaults and can be overridden by environment
variables carrying the ``STACKCALC_`` prefix, e.g.
``STACKCALC_MAX_STACK_DEPTH=64``.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Optional

ENV_PREFIX = "STACKCALC_"

FLOAT_FORMATS = ("repr", "fixed")

logger = logging.getLogger(__name__)


def _parse_value(raw: str, default: Any) -> Any:
    if isinstance(default, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        return int(raw)
    return raw


class Config:
    """Settings object shared by the evaluator and the command line."""

    _DEFAULTS: Dict[str, Any] = {
        "max_stack_depth": 256,
        "trace_tokens": False,
        "enable_debug_logs": False,
        "keep_going": False,
        "float_format": "repr",
    }

    def __init__(self, **kwargs):
        unknown = set(kwargs) - set(self._DEFAULTS)
        if unknown:
            raise TypeError(f"unknown config option(s): {', '.join(sorted(unknown))}")
        self.max_stack_depth: int = kwargs.get("max_stack_depth", self._DEFAULTS["max_stack_depth"])
        self.trace_tokens: bool = kwargs.get("trace_tokens", self._DEFAULTS["trace_tokens"])
        self.enable_debug_logs: bool = kwargs.get("enable_debug_logs", self._DEFAULTS["enable_debug_logs"])
        self.keep_going: bool = kwargs.get("keep_going", self._DEFAULTS["keep_going"])
        self.float_format: str = kwargs.get("float_format", self._DEFAULTS["float_format"])
        self.validate()

    def validate(self) -> None:
        if self.max_stack_depth < 1:
            raise ValueError("max_stack_depth must be at least 1")
        if self.float_format not in FLOAT_FORMATS:
            raise ValueError(
                f"float_format must be one of {', '.join(FLOAT_FORMATS)}, got {self.float_format!r}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Config":
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for key, default in cls._DEFAULTS.items():
            raw = environ.get(ENV_PREFIX + key.upper())
            if raw is None:
                continue
            try:
                value = _parse_value(raw, default)
                cls(**{key: value})
            except ValueError as e:
                logger.warning("ignoring %s%s=%r: %s", ENV_PREFIX, key.upper(), raw, e)
                continue
            values[key] = value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def replace(self, **changes) -> "Config":
        values = self.to_dict()
        values.update({k: v for k, v in changes.items() if v is not None})
        return Config(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, key) for key in self._DEFAULTS}

    def __repr__(self):
        options = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"Config({options})"


config = Config.from_env()
