"""Tests for the ListFunctions client wrapper."""

import pytest
from botocore.exceptions import ClientError

from lambda_panel.errors import ErrorKind, FunctionListError
from lambda_panel.lambda_client import LambdaClient


class FakeBotoClient:
    def __init__(self, responses=None, error=None) -> None:
        self.responses = list(responses or [])
        self.error = error
        self.calls: list[dict] = []

    def list_functions(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


class FakeSession:
    def __init__(self, client: FakeBotoClient) -> None:
        self._client = client
        self.created: list[tuple[str, str]] = []

    def client(self, service: str, region_name: str, config=None):
        self.created.append((service, region_name))
        return self._client


def test_list_page_maps_functions_and_marker() -> None:
    boto_client = FakeBotoClient(
        [
            {
                "Functions": [
                    {
                        "FunctionName": "orders-api",
                        "Description": "Orders",
                        "LastModified": "2024-03-01T10:00:00.000+0000",
                    },
                    {"Description": "no name, skipped"},
                    {"FunctionName": "billing"},
                ],
                "NextMarker": "abc",
            }
        ]
    )
    session = FakeSession(boto_client)
    client = LambdaClient("dev", "eu-west-1", session=session)

    page = client.list_page()

    assert [r.name for r in page.records] == ["orders-api", "billing"]
    assert page.records[0].description == "Orders"
    assert page.records[1].description == ""
    assert page.next_marker == "abc"
    assert boto_client.calls == [{}]
    assert session.created == [("lambda", "eu-west-1")]


def test_list_page_passes_marker_and_reuses_client() -> None:
    boto_client = FakeBotoClient(
        [{"Functions": [], "NextMarker": "m2"}, {"Functions": []}]
    )
    session = FakeSession(boto_client)
    client = LambdaClient("dev", "us-east-1", session=session)

    first = client.list_page("m1")
    second = client.list_page(first.next_marker)

    assert boto_client.calls == [{"Marker": "m1"}, {"Marker": "m2"}]
    assert second.next_marker is None
    assert len(session.created) == 1


def test_list_page_wraps_expired_token() -> None:
    error = ClientError(
        {
            "Error": {
                "Code": "ExpiredTokenException",
                "Message": "The security token included in the request is expired",
            }
        },
        "ListFunctions",
    )
    client = LambdaClient(
        "dev", "us-east-1", session=FakeSession(FakeBotoClient(error=error))
    )

    with pytest.raises(FunctionListError) as exc_info:
        client.list_page()
    assert exc_info.value.kind == ErrorKind.SESSION_EXPIRED
    assert exc_info.value.__cause__ is error
