"""Test fixtures for linear-md tests.

This module provides sample Linear issue and document payloads and record
factories built from them.
"""

from .sample_records import (
    DOCUMENT_NODE,
    ISSUE_NODE,
    make_document,
    make_issue,
)

__all__ = [
    'DOCUMENT_NODE',
    'ISSUE_NODE',
    'make_document',
    'make_issue',
]
