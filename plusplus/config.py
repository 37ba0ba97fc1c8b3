"""Interpreter limits.

All resource bounds of the language are explicit configuration. The defaults
match the reference interpreter; each can be overridden from the environment
(``PPP_MAX_TOKENS`` and friends) or from the command line.


File: config.py
Version: 0.1.0
License: MIT
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

from plusplus.exceptions import ConfigError

ENV_PREFIX = "PPP_"


@dataclass(frozen=True)
class Limits:
    """Hard caps enforced by the lexer and the interpreter."""

    max_tokens: int = 1024
    max_identifier_length: int = 20
    max_variables: int = 100
    max_int_digits: int = 100
    max_string_length: int = 127

    def __post_init__(self):
        for field in fields(self):
            value = getattr(self, field.name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigError(f"Limit '{field.name}' must be a positive integer, got {value!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Limits":
        """
        Build limits from ``PPP_<FIELD>`` environment variables.

        Parameters:
            environ (Mapping[str, str]): Environment to read, ``os.environ`` by default.

        Returns:
            Limits: Defaults overlaid with any values found.

        Raises:
            ConfigError: If a variable is not a positive integer.
        """
        environ = os.environ if environ is None else environ
        overrides = {}
        for field in fields(cls):
            key = ENV_PREFIX + field.name.upper()
            raw = environ.get(key)
            if raw is None or raw.strip() == "":
                continue
            try:
                overrides[field.name] = int(raw)
            except ValueError as e:
                raise ConfigError(f"{key} must be an integer, got {raw!r}") from e
        return cls(**overrides)

    def override(self, **values) -> "Limits":
        """
        Return a copy with the given non-``None`` values replaced.
        """
        return replace(self, **{k: v for k, v in values.items() if v is not None})


DEFAULT_LIMITS = Limits()
