from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union
from urllib.parse import SplitResult, unquote, urlsplit

from . import constants
from .config import S3SourceConfig, SourceEntry
from .errors import ConfigurationError, InstanceProfileError
from .http import ConnectionPools
from .logging import get_logger

logger = get_logger()


@dataclass(frozen=True)
class Credentials:
    access_key_id: str
    secret_access_key: str
    security_token: Optional[str] = None
    region: str = constants.DEFAULT_REGION


@dataclass(frozen=True)
class Target:
    host: str
    path: str
    query: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None

    @classmethod
    def from_uri(cls, uri: Union[str, SplitResult, "Target"]) -> "Target":
        if isinstance(uri, Target):
            return uri
        parsed = urlsplit(uri) if isinstance(uri, str) else uri
        # hostname lowercases; bucket names are looked up as written.
        host = parsed.netloc.rpartition("@")[2].partition(":")[0]
        if not host:
            raise ConfigurationError(f"URI {parsed.geturl()!r} has no bucket host")
        return cls(
            host=host,
            path=parsed.path or "/",
            query=parsed.query or None,
            user=unquote(parsed.username) if parsed.username else None,
            password=unquote(parsed.password) if parsed.password else None,
        )

    @property
    def has_embedded_credentials(self) -> bool:
        return bool(self.user and self.password)


class CredentialResolver:
    """
    Decide which credentials sign a request for a given bucket host.

    Embedded ``user:password`` in the URI wins outright. Otherwise the host's
    ``s3_source`` entry selects a provider (``env``, ``instance_profile``, or
    inline ``id``/``secret``).
    """

    def __init__(
        self,
        config: Optional[Union[Mapping[Any, Any], S3SourceConfig]] = None,
        *,
        env: Optional[Mapping[str, str]] = None,
        http: Optional[Any] = None,
    ) -> None:
        self.config = S3SourceConfig.from_store(config)
        self.env = os.environ if env is None else env
        self._http = http

    @property
    def http(self) -> Any:
        if self._http is None:
            self._http = ConnectionPools()
        return self._http

    def resolve(self, target: Union[str, Target]) -> Credentials:
        target = Target.from_uri(target)
        if target.has_embedded_credentials:
            logger.debug("using credentials embedded in URI for %s", target.host)
            return Credentials(target.user, target.password, None, constants.DEFAULT_REGION)

        entry = self.config.entry_for(target.host)
        logger.info(
            "resolving credentials for %s via provider=%s", target.host, entry.provider or "config"
        )
        if entry.provider == constants.PROVIDER_ENV:
            return self._from_env(entry)
        if entry.provider == constants.PROVIDER_INSTANCE_PROFILE:
            return self._from_instance_profile(entry)
        return self._from_entry(entry)

    # ------------------------------------------------------------------ #
    # Providers
    # ------------------------------------------------------------------ #
    def _from_env(self, entry: SourceEntry) -> Credentials:
        access_key_id = self.env.get(constants.ENV_ACCESS_KEY_ID)
        secret = self.env.get(constants.ENV_SECRET_ACCESS_KEY)
        for name, value in (
            (constants.ENV_ACCESS_KEY_ID, access_key_id),
            (constants.ENV_SECRET_ACCESS_KEY, secret),
        ):
            if not value:
                raise ConfigurationError(
                    f"s3_source for {entry.host} uses env provider but {name} is not set",
                    host=entry.host,
                    field=name,
                )
        return Credentials(
            access_key_id,
            secret,
            self.env.get(constants.ENV_SESSION_TOKEN) or None,
            entry.region_or_default,
        )

    def _from_instance_profile(self, entry: SourceEntry) -> Credentials:
        payload = self._metadata_credentials()
        return Credentials(
            payload["AccessKeyId"],
            payload["SecretAccessKey"],
            payload.get("Token") or None,
            entry.region_or_default,
        )

    def _from_entry(self, entry: SourceEntry) -> Credentials:
        if not entry.access_key_id or not entry.secret:
            missing = "id" if not entry.access_key_id else "secret"
            raise ConfigurationError(
                f"s3_source for {entry.host} missing id or secret",
                host=entry.host,
                field=missing,
            )
        return Credentials(
            entry.access_key_id,
            entry.secret,
            entry.security_token or None,
            entry.region_or_default,
        )

    def _metadata_credentials(self) -> Mapping[str, Any]:
        endpoint = constants.EC2_METADATA_CREDENTIALS
        logger.info("fetching instance profile credentials from %s", endpoint)
        resp = self.http.fetch(endpoint)
        if resp.status_code != 200:
            raise InstanceProfileError(endpoint, resp.status_code, resp.status_message)
        try:
            payload = json.loads(resp.body)
        except ValueError as exc:
            raise InstanceProfileError(
                endpoint, resp.status_code, resp.status_message, detail="response is not JSON"
            ) from exc
        if not isinstance(payload, dict) or not payload.get("AccessKeyId") or not payload.get(
            "SecretAccessKey"
        ):
            raise InstanceProfileError(
                endpoint,
                resp.status_code,
                resp.status_message,
                detail="response is missing AccessKeyId or SecretAccessKey",
            )
        return payload
