"""Frontmatter parsing and serialization for markdown files.

This module separates the leading ``---`` delimited metadata block of a
markdown file from its body, and wraps a metadata block around a body when a
file is written back.

Wire format:
    ---
    linear-issue-id: ABC-12
    team: Platform
    ---

    Body text...

The block is kept as raw text: synced files carry user-authored lines that
must survive a pull verbatim, so the codec never re-serializes them.
"""

import re
from typing import Any, Dict, Optional

import yaml

from .errors import BodyNotFoundError, HeaderMalformedError
from .models import HeaderParts

MARKER = "---"

# Opening marker line at the very start of the document
OPENING_PATTERN = re.compile(r'\A---[ \t]*\r?\n')

# Opening marker, optional inner block, closing marker line. The "end" group
# is empty when the closing marker is the last thing in the file.
HEADER_PATTERN = re.compile(
    r'\A---[ \t]*\r?\n(?:(?P<header>.*?)\r?\n)?---[ \t]*(?P<end>\r?\n|\Z)',
    re.DOTALL
)


class HeaderCodec:
    """Splits and assembles frontmatter blocks.

    A header is present iff the text starts with a marker line and a closing
    marker line exists later. A blank line is not required after the opening
    marker.
    """

    # Maximum allowed depth for YAML structures to prevent DoS attacks
    MAX_YAML_DEPTH = 10

    @classmethod
    def has_header(cls, text: str) -> bool:
        """Return True if the text starts with a complete frontmatter block."""
        return HEADER_PATTERN.match(text) is not None

    @classmethod
    def read_header(cls, text: str) -> Optional[str]:
        """Return the trimmed inner text of the frontmatter block.

        Unlike split_header this does not require a body after the block.

        Returns:
            Header text, or None if the text has no complete frontmatter block
        """
        match = HEADER_PATTERN.match(text)
        if not match:
            return None
        return (match.group('header') or '').strip()

    @classmethod
    def split_header(cls, text: str, file_path: str = "<unknown>") -> Optional[HeaderParts]:
        """Split a document into frontmatter text and body.

        Args:
            text: Full document content
            file_path: Path used in error messages

        Returns:
            HeaderParts with trimmed header text and the untrimmed body
            (everything strictly after the closing marker line), or None when
            the document does not start with a marker line

        Raises:
            HeaderMalformedError: If the opening marker has no closing marker
            BodyNotFoundError: If the closing marker is not followed by a body
        """
        if not OPENING_PATTERN.match(text):
            return None

        match = HEADER_PATTERN.match(text)
        if not match:
            raise HeaderMalformedError(file_path, "closing '---' marker not found")

        if not match.group('end'):
            raise BodyNotFoundError(file_path)

        return HeaderParts(
            header_raw=(match.group('header') or '').strip(),
            body=text[match.end():]
        )

    @classmethod
    def wrap(cls, header_body: str, body: str) -> str:
        """Assemble a document from frontmatter text and body.

        The closing marker is followed by exactly one blank line.
        """
        header_body = header_body.strip()
        if header_body:
            return f"{MARKER}\n{header_body}\n{MARKER}\n\n{body}"
        return f"{MARKER}\n{MARKER}\n\n{body}"

    @staticmethod
    def ensure_trailing_newline(text: str) -> str:
        """Append a single newline unless the text already ends with one."""
        return text if text.endswith('\n') else f"{text}\n"

    @classmethod
    def _validate_yaml_depth(cls, obj: Any, current_depth: int = 0, max_depth: int = MAX_YAML_DEPTH) -> None:
        """Reject YAML structures nested deeper than max_depth.

        Raises:
            HeaderMalformedError: If depth exceeds maximum
        """
        if current_depth > max_depth:
            raise HeaderMalformedError(
                "<yaml>",
                f"YAML structure exceeds maximum depth of {max_depth}"
            )

        if isinstance(obj, dict):
            for value in obj.values():
                cls._validate_yaml_depth(value, current_depth + 1, max_depth)
        elif isinstance(obj, list):
            for item in obj:
                cls._validate_yaml_depth(item, current_depth + 1, max_depth)

    @classmethod
    def load_fields(cls, header_raw: str, file_path: str = "<unknown>") -> Dict[str, Any]:
        """Parse frontmatter text as a YAML mapping.

        Args:
            header_raw: Text between the frontmatter markers
            file_path: Path used in error messages

        Returns:
            Dict of frontmatter fields ({} for an empty block)

        Raises:
            HeaderMalformedError: If the YAML is invalid, not a mapping, or too deep
        """
        try:
            fields = yaml.safe_load(header_raw)
        except yaml.YAMLError as e:
            raise HeaderMalformedError(file_path, f"Invalid YAML syntax: {str(e)}")

        if fields is None:
            return {}

        if not isinstance(fields, dict):
            raise HeaderMalformedError(
                file_path,
                f"Frontmatter must be a YAML dictionary, got {type(fields).__name__}"
            )

        try:
            cls._validate_yaml_depth(fields)
        except HeaderMalformedError as e:
            raise HeaderMalformedError(file_path, e.message)

        return fields
