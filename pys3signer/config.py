from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .constants import DEFAULT_REGION, S3_SOURCE_KEY
from .errors import ConfigurationError


def normalize_key(key: Any) -> str:
    """Map string, symbol-style (``:name``) and enum keys onto one string form."""
    if isinstance(key, Enum):
        return key.name
    text = str(key)
    return text[1:] if text.startswith(":") else text


def _normalize(mapping: Mapping[Any, Any]) -> Dict[str, Any]:
    return {normalize_key(key): value for key, value in mapping.items()}


@dataclass(frozen=True)
class SourceEntry:
    host: str
    provider: Optional[str] = None
    access_key_id: Optional[str] = None
    secret: Optional[str] = None
    security_token: Optional[str] = None
    region: Optional[str] = None

    @classmethod
    def from_mapping(cls, host: str, raw: Mapping[Any, Any]) -> "SourceEntry":
        fields = _normalize(raw)
        return cls(
            host=host,
            provider=fields.get("provider"),
            access_key_id=fields.get("id") or fields.get("access_key_id"),
            secret=fields.get("secret"),
            security_token=fields.get("security_token"),
            region=fields.get("region"),
        )

    @property
    def region_or_default(self) -> str:
        return self.region or DEFAULT_REGION


class S3SourceConfig:
    """
    Read-only view over the ``s3_source`` table of a configuration store.
    """

    def __init__(self, sources: Optional[Mapping[str, Mapping[Any, Any]]]) -> None:
        self._sources = None if sources is None else dict(sources)

    @classmethod
    def from_store(cls, store: Optional[Mapping[Any, Any]]) -> "S3SourceConfig":
        if isinstance(store, S3SourceConfig):
            return store
        top = _normalize(store or {})
        table = top.get(S3_SOURCE_KEY)
        if table is None:
            return cls(None)
        return cls(_normalize(table))

    @property
    def has_sources(self) -> bool:
        return self._sources is not None

    def hosts(self):
        return sorted(self._sources or {})

    def entry_for(self, host: str) -> SourceEntry:
        if self._sources is None:
            raise ConfigurationError(f"no {S3_SOURCE_KEY} key exists in configuration", host=host)
        raw = self._sources.get(host)
        if raw is None:
            raise ConfigurationError(
                f"no key for host {host} in {S3_SOURCE_KEY} in configuration", host=host
            )
        return SourceEntry.from_mapping(host, raw)
