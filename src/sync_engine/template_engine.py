"""Filename template expansion and filesafe conversion.

This module expands filename templates against a Linear record and converts
the result to a name that is valid on all file systems.
"""

import re
from datetime import date
from typing import Optional, Union

from src.linear_client.models import Record, RecordType

from .models import DateFormat

MARKDOWN_EXTENSION = ".md"

# Characters that are invalid or problematic on various file systems:
# / \ ? % * : | " < >
UNSAFE_CHARACTERS = re.compile(r'[/\\?%*:|"<>]')


class TemplateEngine:
    """Expands ${...} tokens in filename templates.

    Supported tokens:
    - ${title}: Record title, or "Untitled"
    - ${id}: Issue key (e.g. ABC-12) for issues that expose one, else the
      identifier the record was resolved with
    - ${type}: "issue" or "document"
    - ${date}: Today's date in the configured format
    - ${ticket}: Same as ${id}, kept for older templates

    Each token is replaced literally wherever it occurs.

    Examples:
        >>> TemplateEngine.format_date(date(2023, 4, 28), DateFormat.SHORT)
        '230428'
        >>> TemplateEngine.sanitize("Bad:Name?.md")
        'Bad-Name-.md'
    """

    @staticmethod
    def format_date(value: date, date_format: Union[DateFormat, str] = DateFormat.YMD) -> str:
        """Format a calendar date with zero-padded fields.

        Args:
            value: Date (or datetime, whose local calendar fields are used)
            date_format: ISO, Short, YMD, DMY or MDY; unknown values use YMD

        Returns:
            Formatted date string
        """
        try:
            date_format = DateFormat(date_format)
        except ValueError:
            date_format = DateFormat.YMD

        year = f"{value.year:04d}"
        month = f"{value.month:02d}"
        day = f"{value.day:02d}"

        if date_format == DateFormat.ISO:
            return f"{year}-{month}-{day}"
        if date_format == DateFormat.SHORT:
            return f"{year[-2:]}{month}{day}"
        if date_format == DateFormat.DMY:
            return f"{day}{month}{year}"
        if date_format == DateFormat.MDY:
            return f"{month}{day}{year}"
        return f"{year}{month}{day}"

    @classmethod
    def expand(
        cls,
        template: str,
        record: Record,
        fallback_id: str,
        record_type: RecordType,
        date_format: Union[DateFormat, str] = DateFormat.YMD,
        today: Optional[date] = None,
    ) -> str:
        """Substitute all tokens in a filename template.

        Args:
            template: Template string, e.g. "${id}-${title}.md"
            record: Fetched Linear record
            fallback_id: Identifier the record was resolved with
            record_type: Type of the record
            date_format: Format for the ${date} token
            today: Date used for ${date} (defaults to the local date)

        Returns:
            Raw (unsanitized) filename
        """
        ticket = fallback_id
        if record_type == RecordType.ISSUE and record.ticket_identifier:
            ticket = record.ticket_identifier

        replacements = {
            '${title}': record.title or "Untitled",
            '${id}': ticket,
            '${type}': record_type.value,
            '${date}': cls.format_date(today or date.today(), date_format),
            '${ticket}': ticket,
        }

        # Single pass: tokens inside substituted values stay literal
        pattern = re.compile('|'.join(re.escape(token) for token in replacements))
        return pattern.sub(lambda match: replacements[match.group(0)], template)

    @staticmethod
    def sanitize_component(name: str) -> str:
        """Replace every filesystem-unsafe character with a hyphen."""
        return UNSAFE_CHARACTERS.sub('-', name)

    @staticmethod
    def ensure_extension(name: str) -> str:
        """Append .md unless the name already ends with it (case-insensitive)."""
        if name.lower().endswith(MARKDOWN_EXTENSION):
            return name
        return f"{name}{MARKDOWN_EXTENSION}"

    @classmethod
    def sanitize(cls, raw_filename: str) -> str:
        """Convert an expanded template to a filesafe markdown filename."""
        return cls.ensure_extension(cls.sanitize_component(raw_filename))
