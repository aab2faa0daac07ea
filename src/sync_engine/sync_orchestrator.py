"""Pull and push orchestration for a single markdown file.

This module provides the SyncOrchestrator class which composes identifier
resolution, frontmatter handling, template expansion and the Linear API into
the two sync directions:

- pull (Linear -> local): rewrite the file from the record and move it to the
  path the naming rules currently give it
- push (local -> Linear): send the file's title and body to the record

Each call re-reads the file and the configuration; no state is kept between
calls. Writes are not transactional: if a pull is interrupted between writing
the destination and deleting the source, both files remain on disk.
"""

import logging
import os
from datetime import date
from typing import Callable, Optional

from src.linear_client.api_wrapper import LinearAPI
from src.linear_client.errors import RecordNotFoundError
from src.linear_client.models import Record, RecordType

from .config_store import ConfigStore
from .errors import FilesystemError, HeaderMalformedError
from .frontmatter_merger import FrontmatterMerger
from .header_codec import HeaderCodec
from .identifier_resolver import IdentifierResolver
from .models import DirectoryMode, PullResult, PushResult, SyncReference
from .path_resolver import PathResolver

logger = logging.getLogger(__name__)


class SyncOrchestrator:
    """Runs one-shot pulls and pushes between markdown files and Linear.

    Example:
        >>> orchestrator = SyncOrchestrator(LinearAPI(Authenticator()), ConfigStore())
        >>> result = orchestrator.pull("notes/ABC-12.md")
        >>> result.destination_path
        'notes/Fix login.md'
    """

    def __init__(
        self,
        api: LinearAPI,
        config_store: Optional[ConfigStore] = None,
        today: Callable[[], date] = date.today,
    ):
        """Initialize the orchestrator.

        Args:
            api: Linear record store client
            config_store: Settings store (defaults to .linear-md/config.yaml)
            today: Provider of the date used for the ${date} token
        """
        self.api = api
        self.config_store = config_store or ConfigStore()
        self._today = today

    def _read_file(self, file_path: str) -> str:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError as e:
            raise FilesystemError(file_path, 'read', 'File not found') from e
        except PermissionError as e:
            raise FilesystemError(file_path, 'read', 'Permission denied') from e
        except (OSError, UnicodeDecodeError) as e:
            raise FilesystemError(file_path, 'read', str(e)) from e

    def _write_file(self, file_path: str, content: str) -> None:
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except PermissionError as e:
            raise FilesystemError(file_path, 'write', 'Permission denied') from e
        except OSError as e:
            raise FilesystemError(file_path, 'write', str(e)) from e

    def _delete_file(self, file_path: str) -> None:
        try:
            os.remove(file_path)
        except OSError as e:
            raise FilesystemError(file_path, 'delete', str(e)) from e

    def _fetch_record(self, reference: SyncReference) -> Record:
        """Fetch the record a reference points to.

        Raises:
            RecordNotFoundError: If Linear has no such issue or document
        """
        record: Optional[Record]
        if reference.record_type == RecordType.ISSUE:
            record = self.api.fetch_issue(reference.record_id)
        else:
            record = self.api.fetch_document(reference.record_id)

        if record is None:
            raise RecordNotFoundError(reference.record_type.value, reference.record_id)
        return record

    def _base_directory(self, source_dir: str, record: Record, mode: DirectoryMode) -> str:
        """Directory that bucket subdirectories are created under.

        A file sitting in any bucket directory (its record's current one,
        another workflow state or another team) keeps the bucket's parent as
        base, so pulls after a status or team change do not nest buckets.
        """
        if mode == DirectoryMode.NONE:
            return source_dir

        team_names = self.api.team_names() if mode == DirectoryMode.TEAM else ()
        known = PathResolver.bucket_names(record, mode, team_names)
        normalized = os.path.normpath(source_dir) if source_dir else ''
        if normalized and os.path.basename(normalized) in known:
            logger.debug(f"{source_dir} is a bucket directory, using its parent as base")
            return os.path.dirname(normalized)
        return source_dir

    def pull(self, file_path: str) -> PullResult:
        """Overwrite a file with its Linear record and apply naming rules.

        Args:
            file_path: Markdown file to pull into

        Returns:
            PullResult describing where the content was written

        Raises:
            IdentityNotFoundError: If the file is not bound to a record
            HeaderMalformedError: If the identity line is not inside a frontmatter block
            RecordNotFoundError: If the record does not exist
            FilesystemError: If reading, writing, mkdir or delete fails
        """
        config = self.config_store.snapshot()
        content = self._read_file(file_path)
        reference = IdentifierResolver.resolve(file_path, content)

        if reference.from_header and reference.header_raw is None:
            raise HeaderMalformedError(file_path)

        record = self._fetch_record(reference)
        logger.debug(f"Fetched {reference.record_type.value} {reference.record_id}: '{record.title}'")

        header = FrontmatterMerger.build(
            record,
            reference.record_id,
            reference.record_type,
            reference.header_raw if reference.from_header else None,
            config,
        )

        if config.skip_frontmatter:
            new_content = record.body
        else:
            new_content = HeaderCodec.wrap(header, record.body)
        new_content = HeaderCodec.ensure_trailing_newline(new_content)

        source_dir = os.path.dirname(file_path)
        directory = PathResolver.directory_for(
            record,
            self._base_directory(source_dir, record, config.directory_mode),
            config.directory_mode,
        )
        filename = PathResolver.filename_for(
            record,
            reference.record_id,
            reference.record_type,
            config,
            today=self._today(),
        )
        destination = os.path.join(directory, filename)

        self._write_file(destination, new_content)
        logger.info(
            f"Updated {destination} with content from Linear "
            f"{reference.record_type.value} {reference.record_id}"
        )

        renamed = False
        if os.path.abspath(destination) != os.path.abspath(file_path):
            # Case-only renames on case-insensitive file systems point at the same file
            if os.path.exists(file_path) and not os.path.samefile(destination, file_path):
                self._delete_file(file_path)
                logger.info(f"Deleted old file {file_path}")
            renamed = True

        return PullResult(
            record_type=reference.record_type,
            record_id=reference.record_id,
            source_path=file_path,
            destination_path=destination,
            renamed=renamed,
        )

    def push(self, file_path: str) -> PushResult:
        """Send a file's title and body to its Linear record.

        A file bound only through its name gets the identity line written into
        it before the record is updated: first line of its existing frontmatter
        block, or a new block when it has none. Like pull, push starts from a
        fresh configuration snapshot, though no setting changes what it sends.

        Args:
            file_path: Markdown file to push

        Returns:
            PushResult describing the update

        Raises:
            ConfigError: If a setting has an invalid value
            IdentityNotFoundError: If the file is not bound to a record
            HeaderMalformedError: If the frontmatter cannot be separated from the body
            RecordNotFoundError: If the record does not exist
            RemoteUpdateFailedError: If Linear rejects the update
            FilesystemError: If reading or writing the file fails
        """
        self.config_store.snapshot()
        content = self._read_file(file_path)
        reference = IdentifierResolver.resolve(file_path, content)

        header_added = False
        if reference.from_header:
            parts = HeaderCodec.split_header(content, file_path)
            if parts is None:
                raise HeaderMalformedError(file_path)
        else:
            # A frontmatter block without an identity line stays metadata
            parts = None
            if HeaderCodec.has_header(content):
                parts = HeaderCodec.split_header(content, file_path)
        body = parts.body.strip() if parts else content.strip()

        title = os.path.splitext(os.path.basename(file_path))[0]
        record = self._fetch_record(reference)

        if not reference.from_header:
            identity = IdentifierResolver.identity_line(reference.record_type, reference.record_id)
            if parts:
                header = '\n'.join(line for line in (identity, parts.header_raw) if line)
                new_content = HeaderCodec.wrap(header, parts.body.lstrip('\r\n'))
            else:
                new_content = HeaderCodec.wrap(identity, content)
            self._write_file(file_path, HeaderCodec.ensure_trailing_newline(new_content))
            header_added = True
            logger.info(f"Added '{identity}' to the frontmatter of {file_path}")

        if reference.record_type == RecordType.ISSUE:
            self.api.update_issue(record.id, title=title, description=body)
        else:
            self.api.update_document(record.id, title=title, content=body)

        logger.info(
            f"Updated {reference.record_type.value} {reference.record_id} "
            f"with content from {file_path}"
        )
        return PushResult(
            record_type=reference.record_type,
            record_id=reference.record_id,
            title=title,
            header_added=header_added,
        )
