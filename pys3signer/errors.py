from __future__ import annotations


class S3SignerError(Exception):
    """Base error thrown while signing S3 URIs."""


class ConfigurationError(S3SignerError):
    """Raised when the local s3_source configuration is absent or incomplete."""

    def __init__(self, message: str, *, host: str | None = None, field: str | None = None):
        super().__init__(message)
        self.host = host
        self.field = field


class InstanceProfileError(S3SignerError):
    """Raised when the instance metadata service does not hand out credentials."""

    def __init__(
        self,
        endpoint: str,
        status_code: int | None = None,
        status_message: str = "",
        *,
        detail: str | None = None,
    ):
        if detail is None:
            detail = f"{status_message} {status_code}"
        super().__init__(f"Unable to fetch AWS credentials from {endpoint}: {detail}")
        self.endpoint = endpoint
        self.status_code = status_code
        self.status_message = status_message
