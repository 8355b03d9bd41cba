from __future__ import annotations

import datetime as dt
from typing import Any, Callable, Mapping, Optional, Union

from . import aws_signature, constants
from .config import S3SourceConfig
from .credentials import CredentialResolver, Target
from .http import ConnectionPools
from .errors import S3SignerError
from .logging import get_logger
from .result import SigningResult
from .util import amz_timestamp, utc_now

logger = get_logger()


class S3URISigner:
    """
    Turn ``s3://bucket/key`` URIs into presigned HTTPS download links.

    Implements SigV4 query-string authentication without an AWS SDK. See
    https://docs.aws.amazon.com/AmazonS3/latest/API/sigv4-query-string-auth.html
    """

    def __init__(
        self,
        config: Optional[Union[Mapping[Any, Any], S3SourceConfig]] = None,
        *,
        env: Optional[Mapping[str, str]] = None,
        http: Optional[Any] = None,
        clock: Optional[Callable[[], dt.datetime]] = None,
    ) -> None:
        self.resolver = CredentialResolver(config, env=env, http=http)
        self.clock = clock or utc_now

    def sign(self, uri: Union[str, Target], expiration: int = constants.DEFAULT_EXPIRATION) -> str:
        target = Target.from_uri(uri)
        credentials = self.resolver.resolve(target)

        date_time = amz_timestamp(self.clock())
        date = date_time[:8]
        scope = aws_signature.credential_scope(date, credentials.region)
        host = aws_signature.virtual_host(target.host, credentials.region)

        query = aws_signature.canonical_query_string(credentials, date_time, scope, expiration)
        request = aws_signature.canonical_request(target.path, query, host)
        signature = aws_signature.compute_signature(credentials, date, scope, request, date_time)

        logger.info(
            "signed %s%s for region=%s expires=%ss", target.host, target.path, credentials.region, expiration
        )
        return aws_signature.assemble_url(host, target.path, query, signature)

    def sign_result(
        self, uri: Union[str, Target], expiration: int = constants.DEFAULT_EXPIRATION
    ) -> SigningResult:
        try:
            return SigningResult.success(self.sign(uri, expiration))
        except S3SignerError as exc:
            logger.warning("signing failed: %s", exc)
            return SigningResult.from_error(exc)


def sign_uri(
    uri: Union[str, Target],
    config: Optional[Mapping[Any, Any]] = None,
    *,
    expiration: int = constants.DEFAULT_EXPIRATION,
    env: Optional[Mapping[str, str]] = None,
    http: Optional[Any] = None,
) -> str:
    if http is not None:
        return S3URISigner(config, env=env, http=http).sign(uri, expiration)
    # One-off call: pools opened for the metadata lookup are closed again.
    with ConnectionPools() as pools:
        return S3URISigner(config, env=env, http=pools).sign(uri, expiration)
