from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .client import DEFAULT_MODEL
from .errors import ConfigurationError

DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class Settings:
    token: str
    model: str = DEFAULT_MODEL
    timeout: Optional[float] = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        return f"Settings(token={'***' if self.token else ''!r}, model={self.model!r}, timeout={self.timeout!r})"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        token = env.get("GITHUB_TOKEN", "").strip()
        model = env.get("GITHUB_MODELS_MODEL", "").strip() or DEFAULT_MODEL
        raw_timeout = env.get("GITHUB_MODELS_TIMEOUT", "").strip()
        timeout: Optional[float] = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigurationError(f"GITHUB_MODELS_TIMEOUT must be a number, got {raw_timeout!r}") from exc
            if timeout < 0:
                raise ConfigurationError("GITHUB_MODELS_TIMEOUT must not be negative")
            if timeout == 0:
                timeout = None
        return cls(token=token, model=model, timeout=timeout)
