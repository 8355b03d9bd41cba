"""Shared pytest fixtures for the signer tests."""

import datetime as dt
import json
from typing import List

import pytest

from pys3signer.http import HttpResponse

EXAMPLE_SECRET = "wJalrXUtnFEMI/K7MDENG/bPxRfiCYEXAMPLEKEY"


class FakeHttp:
    """Records every fetched URI and replays a canned response."""

    def __init__(self, response: HttpResponse) -> None:
        self.response = response
        self.calls: List[str] = []

    def fetch(self, uri: str) -> HttpResponse:
        self.calls.append(uri)
        return self.response


@pytest.fixture
def fixed_clock():
    """Clock frozen at the AWS documentation example instant."""
    return lambda: dt.datetime(2013, 5, 24, 0, 0, 0, tzinfo=dt.timezone.utc)


@pytest.fixture
def metadata_ok() -> FakeHttp:
    body = json.dumps(
        {
            "Code": "Success",
            "AccessKeyId": "ASIAMETADATA",
            "SecretAccessKey": "metadata/secret+key=",
            "Token": "IQoJb3JpZ2luX2VjE/token+part==",
        }
    )
    return FakeHttp(HttpResponse(200, "OK", body))


@pytest.fixture
def metadata_forbidden() -> FakeHttp:
    return FakeHttp(HttpResponse(403, "Forbidden", ""))
