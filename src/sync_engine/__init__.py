"""Content synchronization engine for Linear markdown sync.

This package keeps a local markdown file and a Linear issue or document
consistent in both directions: it resolves which record a file is bound to,
regenerates the file's frontmatter, derives the file's name and directory
from configurable templates, and moves body content between the two.
"""

from .sync_orchestrator import SyncOrchestrator
from .models import (
    DateFormat,
    DirectoryMode,
    PullResult,
    PushResult,
    SyncReference,
    TemplateConfig,
)
from .errors import (
    SyncEngineError,
    IdentityNotFoundError,
    HeaderMalformedError,
    BodyNotFoundError,
    FilesystemError,
    ConfigError,
)
from .config_store import ConfigStore
from .frontmatter_merger import FrontmatterMerger
from .header_codec import HeaderCodec
from .identifier_resolver import IdentifierResolver
from .path_resolver import PathResolver
from .sync_actions import SyncAction, SyncActionProvider
from .template_engine import TemplateEngine

__all__ = [
    'SyncOrchestrator',
    'DateFormat',
    'DirectoryMode',
    'PullResult',
    'PushResult',
    'SyncReference',
    'TemplateConfig',
    'SyncEngineError',
    'IdentityNotFoundError',
    'HeaderMalformedError',
    'BodyNotFoundError',
    'FilesystemError',
    'ConfigError',
    'ConfigStore',
    'FrontmatterMerger',
    'HeaderCodec',
    'IdentifierResolver',
    'PathResolver',
    'SyncAction',
    'SyncActionProvider',
    'TemplateEngine',
]
