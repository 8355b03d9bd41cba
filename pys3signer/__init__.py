"""
Pure Python presigner for S3 download URLs.

Implements AWS Signature Version 4 query-string authentication so that
package fetchers can turn ``s3://bucket/key`` sources into time-limited
HTTPS links without depending on an AWS SDK.
"""

from .credentials import CredentialResolver, Credentials, Target
from .errors import ConfigurationError, InstanceProfileError, S3SignerError
from .http import ConnectionPools, HttpResponse
from .result import ErrorKind, SigningFailure, SigningResult
from .signer import S3URISigner, sign_uri

__all__ = [
    "S3URISigner",
    "sign_uri",
    "CredentialResolver",
    "Credentials",
    "Target",
    "ConnectionPools",
    "HttpResponse",
    "S3SignerError",
    "ConfigurationError",
    "InstanceProfileError",
    "ErrorKind",
    "SigningFailure",
    "SigningResult",
]
