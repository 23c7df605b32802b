"""Service configuration for adplatforms."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from adplatforms._constants import DEFAULT_ALLOWED_CONTENT_TYPES, DEFAULT_MAX_UPLOAD_BYTES
from adplatforms.exceptions import AdPlatformsConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise AdPlatformsConfigError(f"{name} must be an integer, got {value!r}") from exc


def _env_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip().lower() for item in value.split(",") if item.strip())


@dataclasses.dataclass(frozen=True)
class AdPlatformsConfig:
    """Service configuration.

    Parameters
    ----------
    host : str
        Interface the HTTP server binds to.
    port : int
        TCP port the HTTP server listens on.
    encoding : str
        Text encoding of uploaded files.
    allowed_content_types : tuple of str
        MIME types accepted for uploads (compared case-insensitively).
    raise_on_partial : bool
        When ``True`` a batch with rejected lines raises
        :class:`~adplatforms.exceptions.PartialBatchError` after the store
        has been updated. When ``False`` the report is returned and the
        rejected lines are only available on it.
    max_upload_bytes : int
        Upper bound for one uploaded file.
    preload_path : str or None
        File ingested once when the server starts.
    """

    host: str = "127.0.0.1"
    port: int = 8080
    encoding: str = "utf-8"
    allowed_content_types: tuple[str, ...] = DEFAULT_ALLOWED_CONTENT_TYPES
    raise_on_partial: bool = True
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    preload_path: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            raise AdPlatformsConfigError(f"port must be between 0 and 65535, got {self.port}")
        if self.max_upload_bytes <= 0:
            raise AdPlatformsConfigError(f"max_upload_bytes must be positive, got {self.max_upload_bytes}")

    @classmethod
    def from_env(cls, **overrides: Any) -> AdPlatformsConfig:
        """Create configuration from ``ADPLATFORMS_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        AdPlatformsConfigError
            If a numeric variable cannot be parsed or a value is out of range.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "ADPLATFORMS_HOST": "host",
            "ADPLATFORMS_ENCODING": "encoding",
            "ADPLATFORMS_PRELOAD_PATH": "preload_path",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None and val.strip():
                config_kwargs[field_name] = val.strip()

        port_env = env.get("ADPLATFORMS_PORT")
        if port_env is not None and "port" not in overrides:
            config_kwargs["port"] = _env_int("ADPLATFORMS_PORT", port_env)

        max_bytes_env = env.get("ADPLATFORMS_MAX_UPLOAD_BYTES")
        if max_bytes_env is not None and "max_upload_bytes" not in overrides:
            config_kwargs["max_upload_bytes"] = _env_int("ADPLATFORMS_MAX_UPLOAD_BYTES", max_bytes_env)

        types_env = env.get("ADPLATFORMS_ALLOWED_CONTENT_TYPES")
        if types_env is not None and "allowed_content_types" not in overrides:
            config_kwargs["allowed_content_types"] = _env_csv(types_env)

        if "raise_on_partial" not in overrides:
            config_kwargs["raise_on_partial"] = _env_bool(env.get("ADPLATFORMS_RAISE_ON_PARTIAL"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
