from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .errors import InstanceProfileError, S3SignerError


class ErrorKind(Enum):
    CONFIGURATION = "configuration"
    INSTANCE_PROFILE = "instance_profile"


@dataclass(frozen=True)
class SigningFailure:
    kind: ErrorKind
    message: str
    error: Optional[S3SignerError] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_error(cls, error: S3SignerError) -> "SigningFailure":
        if isinstance(error, InstanceProfileError):
            return cls(ErrorKind.INSTANCE_PROFILE, str(error), error)
        return cls(ErrorKind.CONFIGURATION, str(error), error)


@dataclass(frozen=True)
class SigningResult:
    """Outcome of a signing call: exactly one of ``url`` and ``failure`` is set."""

    url: Optional[str] = None
    failure: Optional[SigningFailure] = None

    @classmethod
    def success(cls, url: str) -> "SigningResult":
        return cls(url=url)

    @classmethod
    def from_error(cls, error: S3SignerError) -> "SigningResult":
        return cls(failure=SigningFailure.from_error(error))

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> str:
        if self.failure is None:
            return self.url
        if self.failure.error is not None:
            raise self.failure.error
        raise S3SignerError(self.failure.message)
