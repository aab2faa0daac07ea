"""Resolution of the Linear record a markdown file is bound to."""

import logging
import os
import re
from typing import Optional

from src.linear_client.models import RecordType

from .errors import IdentityNotFoundError
from .header_codec import HeaderCodec
from .models import ReferenceSource, SyncReference

logger = logging.getLogger(__name__)

# Identity line anywhere in the document; first match wins
IDENTITY_PATTERN = re.compile(r'linear-(issue|document)-id:\s*([\w-]+)')

# Issue keys such as ABC-123 embedded in a file name
TICKET_PATTERN = re.compile(r'[A-Z]+-\d+')


class IdentifierResolver:
    """Extracts a (record type, record id) pair from a markdown file.

    The identity line in the document text takes precedence. Without one, the
    first issue key found in the file's base name is used; documents cannot be
    resolved from a file name.

    Example:
        >>> ref = IdentifierResolver.resolve("notes/ABC-12 Fix login.md", "body")
        >>> ref.record_type, ref.record_id
        (<RecordType.ISSUE: 'issue'>, 'ABC-12')
    """

    @staticmethod
    def identity_line(record_type: RecordType, record_id: str) -> str:
        """Build the mandatory frontmatter line for a record."""
        return f"linear-{record_type.value}-id: {record_id}"

    @staticmethod
    def identity_key(record_type: RecordType) -> str:
        return f"linear-{record_type.value}-id"

    @classmethod
    def from_text(cls, content: str) -> Optional[SyncReference]:
        """Resolve from an identity line in the document text, if any."""
        match = IDENTITY_PATTERN.search(content)
        if not match:
            return None
        return SyncReference(
            record_type=RecordType(match.group(1)),
            record_id=match.group(2),
            source=ReferenceSource.HEADER,
            header_raw=HeaderCodec.read_header(content),
        )

    @classmethod
    def from_filename(cls, file_path: str) -> Optional[SyncReference]:
        """Resolve an issue id from the first issue key in the file's base name."""
        match = TICKET_PATTERN.search(os.path.basename(file_path))
        if not match:
            return None
        return SyncReference(
            record_type=RecordType.ISSUE,
            record_id=match.group(0),
            source=ReferenceSource.FILENAME,
        )

    @classmethod
    def resolve(cls, file_path: str, content: str) -> SyncReference:
        """Resolve the record a document is bound to.

        Args:
            file_path: Path of the document (only its base name is inspected)
            content: Full document text

        Returns:
            SyncReference describing the record and where it was found

        Raises:
            IdentityNotFoundError: If neither the text nor the file name yields an id
        """
        reference = cls.from_text(content)
        if reference is None:
            reference = cls.from_filename(file_path)

        if reference is None:
            raise IdentityNotFoundError(file_path)

        logger.debug(
            f"Resolved {file_path} to {reference.record_type.value} "
            f"{reference.record_id} (from {reference.source.value})"
        )
        return reference
