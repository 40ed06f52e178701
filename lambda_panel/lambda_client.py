"""AWS Lambda ListFunctions client.

One `LambdaClient` per session: the boto3 session and client are built on
first use from the configured profile and region, never at import time.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .errors import FunctionListError, classify_error
from .models.function_record import FunctionPage, FunctionRecord

__all__ = ["LambdaClient", "ListingClient"]

logger = logging.getLogger(__name__)

_TIMEOUT = int(os.environ.get("LAMBDA_API_TIMEOUT", "12"))
_MAX_ATTEMPTS = int(os.environ.get("LAMBDA_API_MAX_ATTEMPTS", "3"))


class ListingClient(Protocol):
    def list_page(self, marker: str | None = None) -> FunctionPage: ...


class LambdaClient:
    def __init__(self, profile: str | None, region: str, session: Any = None) -> None:
        self.profile = profile
        self.region = region
        self._session = session
        self._client: Any = None

    def _get_client(self) -> Any:
        if self._client is None:
            if self._session is None:
                self._session = boto3.Session(
                    profile_name=self.profile or None, region_name=self.region
                )
            self._client = self._session.client(
                "lambda",
                region_name=self.region,
                config=Config(
                    connect_timeout=_TIMEOUT,
                    read_timeout=_TIMEOUT,
                    retries={"max_attempts": _MAX_ATTEMPTS, "mode": "standard"},
                ),
            )
        return self._client

    def list_page(self, marker: str | None = None) -> FunctionPage:
        """Fetch one page of ListFunctions.

        Args:
            marker: Continuation cursor from the previous page, None for the first.

        Returns:
            FunctionPage with the page's records and the next cursor (None when done).

        Raises:
            FunctionListError: With the classified ErrorKind of the failure.
        """
        params: dict[str, Any] = {}
        if marker:
            params["Marker"] = marker
        try:
            resp = self._get_client().list_functions(**params)
        except (BotoCoreError, ClientError) as exc:
            kind = classify_error(exc)
            logger.debug("ListFunctions failed (%s): %s", kind.value, exc)
            raise FunctionListError(kind, str(exc)) from exc

        records: list[FunctionRecord] = []
        for entry in resp.get("Functions") or []:
            if not isinstance(entry, dict):
                continue
            record = FunctionRecord.from_api(entry)
            if record is not None:
                records.append(record)
        next_marker = resp.get("NextMarker") or None
        logger.debug(
            "Loaded %d functions, first=%s, more=%s",
            len(records),
            records[0].name if records else None,
            bool(next_marker),
        )
        return FunctionPage(records=records, next_marker=next_marker)
