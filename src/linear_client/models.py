"""Data models for Linear records.

This module defines the records fetched from Linear and the tagged Value
union used to read their attributes. Records are treated as a bag of named,
possibly nested attributes that can be addressed with dotted paths such as
``team.name`` or ``state.type``.
"""

import re
from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Union


class RecordType(str, Enum):
    """Remote record variants that a markdown file can be bound to."""
    ISSUE = "issue"
    DOCUMENT = "document"


# ISO 8601 timestamps as returned by the Linear API (2024-01-15T10:30:00.000Z)
ISO_TIMESTAMP_PATTERN = re.compile(
    r'^\d{4}-\d{2}-\d{2}(?:T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$'
)

# Attribute names whose string values carry dates
DATE_FIELDS = {
    'createdAt',
    'updatedAt',
    'archivedAt',
    'canceledAt',
    'completedAt',
    'startedAt',
    'dueDate',
    'snoozedUntilAt',
    'autoArchivedAt',
    'autoClosedAt',
}


class Value:
    """Base class of the tagged attribute value union.

    Variants: StringValue, NumberValue, BooleanValue, DateValue, ObjectValue
    and the ABSENT singleton for missing or null attributes.
    """

    @property
    def is_absent(self) -> bool:
        return False

    @classmethod
    def from_raw(cls, raw: Any, key: Optional[str] = None) -> 'Value':
        """Classify a raw API value.

        Args:
            raw: Value as decoded from the GraphQL JSON payload
            key: Attribute name the value was read from, used to detect dates

        Returns:
            The matching Value variant (ABSENT for None)
        """
        if raw is None:
            return ABSENT
        if isinstance(raw, Value):
            return raw
        if isinstance(raw, bool):
            return BooleanValue(raw)
        if isinstance(raw, (int, float)):
            return NumberValue(raw)
        if isinstance(raw, datetime):
            return DateValue(raw)
        if isinstance(raw, dict):
            return ObjectValue(raw)
        if isinstance(raw, str):
            if key in DATE_FIELDS and ISO_TIMESTAMP_PATTERN.match(raw):
                parsed = _parse_timestamp(raw)
                if parsed is not None:
                    return DateValue(parsed)
            return StringValue(raw)
        # Lists and anything else travel as structured objects
        return ObjectValue({'items': raw} if isinstance(raw, list) else {'value': raw})


class _Absent(Value):
    """Missing attribute marker."""

    _instance: ClassVar[Optional['_Absent']] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_absent(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass(frozen=True)
class StringValue(Value):
    value: str


@dataclass(frozen=True)
class NumberValue(Value):
    value: Union[int, float]


@dataclass(frozen=True)
class BooleanValue(Value):
    value: bool


@dataclass(frozen=True)
class DateValue(Value):
    value: datetime


@dataclass(frozen=True)
class ObjectValue(Value):
    """Nested object such as a team, workflow state, or user."""
    fields: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Value:
        """Return the named field of this object as a Value."""
        return Value.from_raw(self.fields.get(key), key)


def _parse_timestamp(raw: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(raw.replace('Z', '+00:00'))
    except ValueError:
        return None


@dataclass
class Record(ABC):
    """A remote Linear entity exposing id, title, body and named attributes.

    Attributes:
        id: Linear UUID of the record
        title: Human title
        body: Markdown body text (description for issues, content for documents)
        attributes: Raw attribute bag as returned by the API
    """
    id: str
    title: str
    body: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)

    record_type: ClassVar[RecordType]

    @property
    def ticket_identifier(self) -> Optional[str]:
        """Human ticket key (e.g. ABC-12), when the record variant has one."""
        return None

    def get_attribute(self, path: str) -> Value:
        """Resolve a dotted attribute path.

        Args:
            path: Dot-separated path, e.g. "team.name"

        Returns:
            The resolved Value, or ABSENT if any step is missing or null
        """
        parts = [part for part in path.strip().split('.') if part]
        if not parts:
            return ABSENT

        current: Value = ObjectValue(self.attributes)
        for part in parts:
            if not isinstance(current, ObjectValue):
                return ABSENT
            current = current.get(part)
            if current.is_absent:
                return ABSENT
        return current


@dataclass
class IssueRecord(Record):
    """A Linear issue; body is the issue description."""

    record_type: ClassVar[RecordType] = RecordType.ISSUE

    @property
    def ticket_identifier(self) -> Optional[str]:
        identifier = self.attributes.get('identifier')
        return str(identifier) if identifier else None

    @classmethod
    def from_api(cls, node: Dict[str, Any]) -> 'IssueRecord':
        """Build an IssueRecord from an ``issue`` GraphQL node."""
        return cls(
            id=str(node['id']),
            title=node.get('title') or "",
            body=node.get('description') or "",
            attributes=dict(node),
        )


@dataclass
class DocumentRecord(Record):
    """A Linear document; body is the document content."""

    record_type: ClassVar[RecordType] = RecordType.DOCUMENT

    @classmethod
    def from_api(cls, node: Dict[str, Any]) -> 'DocumentRecord':
        """Build a DocumentRecord from a ``document`` GraphQL node."""
        return cls(
            id=str(node['id']),
            title=node.get('title') or "",
            body=node.get('content') or "",
            attributes=dict(node),
        )
