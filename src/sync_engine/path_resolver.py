"""Destination path resolution for pulled files."""

import logging
import os
from datetime import date
from typing import Iterable, Optional, Set, Union

from src.linear_client.models import ObjectValue, Record, RecordType

from .errors import FilesystemError
from .models import DirectoryMode, TemplateConfig
from .template_engine import TemplateEngine

logger = logging.getLogger(__name__)

UNKNOWN_TEAM = "Unknown Team"
UNKNOWN_STATUS = "Unknown Status"


class PathResolver:
    """Derives where a pulled record is written.

    Directory bucketing:
    - none: the base directory unchanged
    - team: <base>/<team name>, or "Unknown Team"
    - status: <base>/<workflow state name>, or "Unknown Status"
    """

    @staticmethod
    def _bucket_name(record: Record, attribute: str, fallback: str) -> str:
        value = record.get_attribute(attribute)
        if isinstance(value, ObjectValue):
            name = value.fields.get('name')
            if name:
                return TemplateEngine.sanitize_component(str(name))
        return fallback

    @classmethod
    def bucket_for(
        cls,
        record: Record,
        mode: Union[DirectoryMode, str] = DirectoryMode.NONE,
    ) -> Optional[str]:
        """Return the bucket subdirectory name for a record, or None without bucketing."""
        mode = DirectoryMode(mode)
        if mode == DirectoryMode.TEAM:
            return cls._bucket_name(record, 'team', UNKNOWN_TEAM)
        if mode == DirectoryMode.STATUS:
            return cls._bucket_name(record, 'state', UNKNOWN_STATUS)
        return None

    @classmethod
    def bucket_names(
        cls,
        record: Record,
        mode: Union[DirectoryMode, str] = DirectoryMode.NONE,
        team_names: Iterable[str] = (),
    ) -> Set[str]:
        """Return every directory name a record of this kind could be bucketed under.

        Covers the record's current bucket, the fallback bucket and, for
        status bucketing, each workflow state of the record's team. Team
        bucketing relies on the caller for the list of team names.
        """
        mode = DirectoryMode(mode)
        if mode == DirectoryMode.NONE:
            return set()

        if mode == DirectoryMode.TEAM:
            candidates = list(team_names)
            names = {UNKNOWN_TEAM}
        else:
            candidates = []
            states = record.get_attribute('team.states.nodes')
            if isinstance(states, ObjectValue):
                candidates = [
                    node.get('name') for node in states.fields.get('items', [])
                    if isinstance(node, dict)
                ]
            names = {UNKNOWN_STATUS}

        names.add(cls.bucket_for(record, mode))
        names.update(TemplateEngine.sanitize_component(str(name)) for name in candidates if name)
        return names

    @classmethod
    def directory_for(
        cls,
        record: Record,
        base_dir: str,
        mode: Union[DirectoryMode, str] = DirectoryMode.NONE,
    ) -> str:
        """Return the destination directory, creating it if absent.

        Args:
            record: Fetched Linear record
            base_dir: Directory the synced file currently lives in
            mode: Bucketing mode

        Returns:
            Destination directory path

        Raises:
            FilesystemError: If the directory cannot be created
        """
        bucket = cls.bucket_for(record, mode)
        directory = os.path.join(base_dir, bucket) if bucket else base_dir

        if directory:
            try:
                os.makedirs(directory, exist_ok=True)
            except OSError as e:
                raise FilesystemError(directory, 'create_directory', str(e)) from e

        return directory

    @staticmethod
    def filename_for(
        record: Record,
        identifier: str,
        record_type: RecordType,
        config: TemplateConfig,
        today: Optional[date] = None,
    ) -> str:
        """Return the filesafe filename for a record per the filename template."""
        raw_filename = TemplateEngine.expand(
            config.filename_format,
            record,
            identifier,
            record_type,
            config.date_format,
            today=today,
        )
        filename = TemplateEngine.sanitize(raw_filename)
        logger.debug(f"Filename template '{config.filename_format}' expanded to '{filename}'")
        return filename
