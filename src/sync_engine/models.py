"""Data models for the sync engine.

This module defines all data models used by the sync engine.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from src.linear_client.models import RecordType


class ReferenceSource(str, Enum):
    """Where a SyncReference was resolved from."""
    HEADER = "header"
    FILENAME = "filename"


class DateFormat(str, Enum):
    """Date formats available to the ${date} template token.

    Examples for 2023-04-28:
        ISO   -> 2023-04-28
        Short -> 230428
        YMD   -> 20230428
        DMY   -> 28042023
        MDY   -> 04282023
    """
    ISO = "ISO"
    SHORT = "Short"
    YMD = "YMD"
    DMY = "DMY"
    MDY = "MDY"


class DirectoryMode(str, Enum):
    """Subdirectory bucketing applied to pulled files."""
    NONE = "none"
    TEAM = "team"
    STATUS = "status"


@dataclass(frozen=True)
class SyncReference:
    """Resolved binding between a markdown file and a Linear record.

    Recomputed on every sync call, never cached.

    Attributes:
        record_type: issue or document
        record_id: Identifier token matching [\\w-]+
        source: Whether the id came from the frontmatter or the filename
        header_raw: Trimmed frontmatter text when the file has one
    """
    record_type: RecordType
    record_id: str
    source: ReferenceSource
    header_raw: Optional[str] = None

    @property
    def from_header(self) -> bool:
        return self.source == ReferenceSource.HEADER


@dataclass(frozen=True)
class HeaderParts:
    """A document split into its frontmatter text and body.

    Attributes:
        header_raw: Trimmed text between the frontmatter markers
        body: Everything after the closing marker line (untrimmed)
    """
    header_raw: str
    body: str


@dataclass(frozen=True)
class TemplateConfig:
    """Per-call snapshot of the configuration that drives a sync.

    Attributes:
        filename_format: Filename template (e.g. "${title}.md")
        date_format: Format used for the ${date} token
        directory_mode: Effective bucketing (NONE unless create_directory is set)
        skip_frontmatter: If True, pulled files are written without frontmatter
        custom_fields: Ordered attribute paths embedded into the frontmatter
        enable_sync_actions: Whether inline Sync Up / Sync Down actions are offered
    """
    filename_format: str = "${title}.md"
    date_format: DateFormat = DateFormat.YMD
    directory_mode: DirectoryMode = DirectoryMode.NONE
    skip_frontmatter: bool = False
    custom_fields: Tuple[str, ...] = field(default_factory=tuple)
    enable_sync_actions: bool = True


@dataclass
class PullResult:
    """Outcome of a pull (Linear -> local).

    Attributes:
        record_type: Type of the pulled record
        record_id: Identifier used to fetch the record
        source_path: File the pull started from
        destination_path: File the pulled content was written to
        renamed: True if the source file was removed because the path changed
    """
    record_type: RecordType
    record_id: str
    source_path: str
    destination_path: str
    renamed: bool = False


@dataclass
class PushResult:
    """Outcome of a push (local -> Linear).

    Attributes:
        record_type: Type of the updated record
        record_id: Identifier resolved from the file
        title: Title sent to Linear (file base name)
        header_added: True if frontmatter was synthesized and written into the file
    """
    record_type: RecordType
    record_id: str
    title: str
    header_added: bool = False
