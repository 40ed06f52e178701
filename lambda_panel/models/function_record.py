"""Function metadata dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

_CONSOLE_URL = "https://{region}.console.aws.amazon.com/lambda/home?region={region}#/functions/{name}"


@dataclass(frozen=True)
class FunctionRecord:
    """One Lambda function as returned by ListFunctions."""

    name: str
    description: str = ""
    last_modified: str = ""

    @classmethod
    def from_api(cls, entry: dict[str, Any]) -> FunctionRecord | None:
        name = entry.get("FunctionName")
        if not name:
            return None
        return cls(
            name=str(name),
            description=str(entry.get("Description") or ""),
            last_modified=str(entry.get("LastModified") or ""),
        )

    @classmethod
    def from_dict(cls, data: object) -> FunctionRecord | None:
        if not isinstance(data, dict):
            return None
        name = data.get("name")
        if not name or not isinstance(name, str):
            return None
        return cls(
            name=name,
            description=str(data.get("description") or ""),
            last_modified=str(data.get("last_modified") or ""),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "description": self.description,
            "last_modified": self.last_modified,
        }


@dataclass(frozen=True)
class FunctionPage:
    records: list[FunctionRecord]
    next_marker: str | None = None


@dataclass(frozen=True)
class PanelItem:
    """A presented row: identifier, title, subtitle and console deep link."""

    identifier: str
    title: str
    description: str
    last_modified: str
    url: str

    @classmethod
    def from_record(cls, record: FunctionRecord, region: str) -> PanelItem:
        return cls(
            identifier=record.name,
            title=record.name,
            description=record.description,
            last_modified=record.last_modified,
            url=console_url(record.name, region),
        )


def console_url(name: str, region: str) -> str:
    return _CONSOLE_URL.format(region=quote(region, safe="-"), name=quote(name, safe=""))
