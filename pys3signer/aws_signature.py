from __future__ import annotations

import hashlib
import hmac
from typing import List, Tuple

from . import constants
from .credentials import Credentials
from .util import base64_uri_escape


def _sign(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def credential_scope(date: str, region: str) -> str:
    return f"{date}/{region}/{constants.SERVICE}/{constants.TERMINATOR}"


def virtual_host(bucket: str, region: str) -> str:
    return f"{bucket}.s3.{region}.amazonaws.com"


def canonical_query_params(
    credentials: Credentials,
    date_time: str,
    scope: str,
    expiration: int,
) -> List[Tuple[str, str]]:
    params = {
        "X-Amz-Algorithm": constants.ALGORITHM,
        "X-Amz-Credential": f"{credentials.access_key_id}/{scope}",
        "X-Amz-Date": date_time,
        "X-Amz-Expires": str(expiration),
        "X-Amz-SignedHeaders": constants.SIGNED_HEADERS,
    }
    if credentials.security_token:
        params["X-Amz-Security-Token"] = credentials.security_token
    # The signature covers the serialized string, so order matters.
    return sorted(params.items())


def canonical_query_string(
    credentials: Credentials,
    date_time: str,
    scope: str,
    expiration: int,
) -> str:
    return "&".join(
        f"{base64_uri_escape(key)}={base64_uri_escape(value)}"
        for key, value in canonical_query_params(credentials, date_time, scope, expiration)
    )


def canonical_request(path: str, query_string: str, host: str) -> str:
    return "\n".join(
        [
            "GET",
            path,
            query_string,
            f"host:{host}",
            "",  # end of canonical headers
            constants.SIGNED_HEADERS,
            constants.UNSIGNED_PAYLOAD,
        ]
    )


def string_to_sign(date_time: str, scope: str, request: str) -> str:
    return "\n".join(
        [
            constants.ALGORITHM,
            date_time,
            scope,
            hashlib.sha256(request.encode("utf-8")).hexdigest(),
        ]
    )


def signing_key(secret_access_key: str, date: str, region: str) -> bytes:
    k_date = _sign(("AWS4" + secret_access_key).encode("utf-8"), date)
    k_region = _sign(k_date, region)
    k_service = _sign(k_region, constants.SERVICE)
    return _sign(k_service, constants.TERMINATOR)


def compute_signature(
    credentials: Credentials,
    date: str,
    scope: str,
    request: str,
    date_time: str,
) -> str:
    """
    Sign ``request`` with a key derived from the secret, date and region.
    """
    key = signing_key(credentials.secret_access_key, date, credentials.region)
    to_sign = string_to_sign(date_time, scope, request)
    return hmac.new(key, to_sign.encode("utf-8"), hashlib.sha256).hexdigest()


def assemble_url(host: str, path: str, query_string: str, signature: str) -> str:
    return f"https://{host}{path}?{query_string}&X-Amz-Signature={signature}"
