"""
Data models for the core module.

This module contains the status and query data classes shared by the poller,
the query executor and the presenter views.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class Indicator(str, Enum):
    """Coarse severity level reported by the status service."""

    NONE = "none"
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "Indicator":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class ComponentStatus:
    """Status of one component, as listed in a snapshot."""

    name: str
    status: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "status": self.status}


@dataclass(frozen=True)
class StatusSnapshot:
    """Point-in-time capture of the status document."""

    indicator: Indicator
    description: str
    components: tuple[ComponentStatus, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "indicator": self.indicator.value,
            "description": self.description,
            "components": [component.to_dict() for component in self.components],
        }


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Error:
    message: str


@dataclass(frozen=True)
class Ready:
    snapshot: StatusSnapshot


PollState = Union[Loading, Error, Ready]

QueryRecord = dict[str, Any]


@dataclass(frozen=True)
class ColumnDescriptor:
    """Describes how one inferred field is rendered as a table column."""

    id: str
    header: str
    sortable: bool = True
    resizable: bool = True
    auto_width: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "header": self.header,
            "accessor": self.id,
            "sortable": self.sortable,
            "resizable": self.resizable,
            "autoWidth": self.auto_width,
        }


@dataclass(frozen=True)
class QueryResult:
    """Represents the records of one query execution and their inferred columns."""

    records: tuple[QueryRecord, ...]
    columns: tuple[ColumnDescriptor, ...] = ()

    @property
    def rows(self) -> list[dict[str, Any]]:
        # the record position is the row identity, even if the record has its own "id"
        return [
            {"id": index, **{key: value for key, value in record.items() if key != "id"}}
            for index, record in enumerate(self.records)
        ]

    def __len__(self) -> int:
        return len(self.records)
