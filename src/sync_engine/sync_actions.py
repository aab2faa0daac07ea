"""Inline Sync Up / Sync Down actions offered for bound markdown files."""

import logging
from dataclasses import dataclass
from typing import List

from .config_store import ConfigStore
from .errors import HeaderMalformedError
from .header_codec import HeaderCodec

logger = logging.getLogger(__name__)

IDENTITY_KEYS = ('linear-issue-id', 'linear-document-id')


@dataclass(frozen=True)
class SyncAction:
    """An action an editor can show at the top of a bound file.

    Attributes:
        title: Label shown to the user
        command: Sync direction the action runs ("push" or "pull")
    """
    title: str
    command: str


SYNC_UP = SyncAction(title="Sync Up", command="push")
SYNC_DOWN = SyncAction(title="Sync Down", command="pull")


class SyncActionProvider:
    """Decides which sync actions a document offers.

    Actions are offered only when enabled in the configuration and the
    document's frontmatter is a YAML mapping carrying an identity key.
    """

    def __init__(self, config_store: ConfigStore):
        self.config_store = config_store

    def actions_for(self, content: str) -> List[SyncAction]:
        """Return the actions for a document, in display order."""
        if not self.config_store.snapshot().enable_sync_actions:
            return []

        header_raw = HeaderCodec.read_header(content)
        if header_raw is None:
            return []

        try:
            fields = HeaderCodec.load_fields(header_raw)
        except HeaderMalformedError as e:
            logger.debug(f"No sync actions, frontmatter unreadable: {e}")
            return []

        if not any(fields.get(key) for key in IDENTITY_KEYS):
            return []

        return [SYNC_UP, SYNC_DOWN]
