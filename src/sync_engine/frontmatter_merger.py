"""Frontmatter regeneration for pulled files.

This module builds the frontmatter written by a pull. The identity line and
configured record attributes are generated from the fetched record; every
other line the user wrote is carried over unchanged.
"""

import json
import logging
from typing import List, Optional, Set

from src.linear_client.models import (
    BooleanValue,
    DateValue,
    NumberValue,
    ObjectValue,
    Record,
    RecordType,
    StringValue,
    Value,
)

from .identifier_resolver import IdentifierResolver
from .models import TemplateConfig

logger = logging.getLogger(__name__)

COMPLEX_OBJECT_PLACEHOLDER = "[Complex Object]"


class FrontmatterMerger:
    """Composes the frontmatter text for a pull.

    Composition order, each line skipped if its key was already emitted:
    1. The identity line (linear-issue-id / linear-document-id)
    2. One line per configured attribute path that resolves on the record
    3. Lines of the existing frontmatter, verbatim and in original order

    Example:
        >>> FrontmatterMerger.build(issue, "ABC-1", RecordType.ISSUE,
        ...                         "author: me", TemplateConfig(custom_fields=("team.name",)))
        'linear-issue-id: ABC-1\\nteam.name: Platform\\nauthor: me'
    """

    @staticmethod
    def line_key(line: str) -> Optional[str]:
        """Return the text before the first colon, or None for lines without one."""
        if ':' not in line:
            return None
        return line.split(':', 1)[0].strip()

    @classmethod
    def render_value(cls, value: Value) -> Optional[str]:
        """Render an attribute value as a single frontmatter value.

        Returns:
            Rendered text, or None for absent values
        """
        if isinstance(value, StringValue):
            rendered = value.value
        elif isinstance(value, BooleanValue):
            rendered = "true" if value.value else "false"
        elif isinstance(value, NumberValue):
            number = value.value
            if isinstance(number, float) and number.is_integer():
                number = int(number)
            rendered = str(number)
        elif isinstance(value, DateValue):
            rendered = value.value.isoformat()
        elif isinstance(value, ObjectValue):
            rendered = cls._render_object(value)
        else:
            return None

        # One field per line
        return ' '.join(rendered.splitlines())

    @staticmethod
    def _render_object(value: ObjectValue) -> str:
        for key in ('name', 'id'):
            nested = value.fields.get(key)
            if nested is not None and nested != "":
                return str(nested)
        try:
            return json.dumps(value.fields, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return COMPLEX_OBJECT_PLACEHOLDER

    @classmethod
    def build(
        cls,
        record: Record,
        identifier: str,
        record_type: RecordType,
        existing_header: Optional[str],
        config: TemplateConfig,
    ) -> str:
        """Build the frontmatter text (without markers) for a pulled record.

        Args:
            record: Fetched Linear record
            identifier: Identifier the file was resolved with
            record_type: Type of the record
            existing_header: Current frontmatter text, or None if the file had none
            config: Configuration snapshot for this call

        Returns:
            Frontmatter text with trailing whitespace trimmed, or "" when
            frontmatter is disabled
        """
        if config.skip_frontmatter:
            return ""

        lines: List[str] = [IdentifierResolver.identity_line(record_type, identifier)]
        emitted: Set[str] = {IdentifierResolver.identity_key(record_type)}

        for path in config.custom_fields:
            path = path.strip()
            if not path or path in emitted:
                continue
            rendered = cls.render_value(record.get_attribute(path))
            if rendered is None:
                logger.debug(f"Attribute '{path}' not set on {record_type.value} {identifier}")
                continue
            lines.append(f"{path}: {rendered}")
            emitted.add(path)

        if existing_header:
            for line in existing_header.splitlines():
                if not line.strip():
                    continue
                key = cls.line_key(line)
                if key is None:
                    lines.append(line)
                    continue
                if key in emitted:
                    continue
                lines.append(line)
                emitted.add(key)

        return '\n'.join(lines).rstrip()
