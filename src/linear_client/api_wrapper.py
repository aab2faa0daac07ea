"""API wrapper for the Linear GraphQL API.

This module posts GraphQL queries and mutations to Linear with requests and
translates transport, HTTP and GraphQL failures into our typed exception
hierarchy. Calls are never retried; a failure surfaces to the caller.
"""

import logging
import re
from typing import Any, Dict, List, Optional

import requests
from requests.exceptions import ConnectionError, Timeout

from .auth import Authenticator
from .errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    LinearError,
    RemoteUpdateFailedError,
)
from .models import DocumentRecord, IssueRecord, RecordType

logger = logging.getLogger(__name__)

LINEAR_API_URL = "https://api.linear.app/graphql"

# 30 second timeout to prevent hanging on a stalled connection
REQUEST_TIMEOUT = 30

ISSUE_QUERY = """
query Issue($id: String!) {
  issue(id: $id) {
    id
    identifier
    title
    description
    url
    number
    priority
    priorityLabel
    estimate
    branchName
    createdAt
    updatedAt
    startedAt
    completedAt
    canceledAt
    dueDate
    team { id key name states { nodes { id name } } }
    state { id name type color }
    assignee { id name displayName email }
    creator { id name displayName email }
    project { id name }
    cycle { id name number }
    parent { id identifier title }
    labels { nodes { id name } }
  }
}
"""

DOCUMENT_QUERY = """
query Document($id: String!) {
  document(id: $id) {
    id
    title
    content
    slugId
    url
    icon
    color
    createdAt
    updatedAt
    creator { id name displayName email }
    updatedBy { id name displayName email }
    project { id name }
  }
}
"""

ISSUE_UPDATE_MUTATION = """
mutation IssueUpdate($id: String!, $input: IssueUpdateInput!) {
  issueUpdate(id: $id, input: $input) {
    success
    issue { id identifier }
  }
}
"""

DOCUMENT_UPDATE_MUTATION = """
mutation DocumentUpdate($id: String!, $input: DocumentUpdateInput!) {
  documentUpdate(id: $id, input: $input) {
    success
    document { id }
  }
}
"""

VIEWER_QUERY = """
query Viewer {
  viewer { id name email }
}
"""

TEAMS_QUERY = """
query Teams {
  teams(first: 250) { nodes { id name } }
}
"""


class _EntityNotFound(Exception):
    """Internal signal that Linear reported the requested entity missing."""


class LinearAPI:
    """Thin client over the Linear GraphQL endpoint with error translation.

    This class:
    1. Authenticates every request with the key from the Authenticator
    2. Translates timeouts, HTTP status codes and GraphQL errors to typed exceptions
    3. Returns fetched entities as IssueRecord / DocumentRecord models

    Example:
        >>> api = LinearAPI(Authenticator())
        >>> issue = api.fetch_issue("ABC-12")
        >>> api.update_issue(issue.id, title="New title", description="Body")
    """

    def __init__(
        self,
        authenticator: Authenticator,
        endpoint: str = LINEAR_API_URL,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the API wrapper.

        Args:
            authenticator: Authenticator used to load the API key per request
            endpoint: GraphQL endpoint URL
            session: Optional requests session (a new one is created if omitted)
        """
        self._authenticator = authenticator
        self.endpoint = endpoint
        self._session = session or requests.Session()

    def _sanitize_credentials(self, text: str, api_key: Optional[str] = None) -> str:
        """Mask API keys in error text before it reaches logs or messages."""
        if not text:
            return text

        sanitized = text
        if api_key:
            sanitized = sanitized.replace(api_key, '***REDACTED***')
        sanitized = re.sub(r'lin_api_[A-Za-z0-9]+', '***REDACTED***', sanitized)
        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        return sanitized

    def _execute(self, query: str, variables: Dict[str, Any], operation: str) -> Dict[str, Any]:
        """Post a GraphQL document and return its ``data`` object.

        Raises:
            InvalidCredentialsError: On HTTP 401 or an authentication GraphQL error
            APIUnreachableError: On timeouts and connection failures
            APIAccessError: On any other HTTP or GraphQL failure
            _EntityNotFound: When Linear reports the entity does not exist
        """
        api_key = self._authenticator.get_api_key()
        logger.debug(f"Linear API call: {operation}")

        try:
            response = self._session.post(
                self.endpoint,
                json={'query': query, 'variables': variables},
                headers={
                    'Authorization': api_key,
                    'Content-Type': 'application/json',
                },
                timeout=REQUEST_TIMEOUT,
            )
        except (Timeout, ConnectionError) as e:
            logger.error(f"Linear API unreachable during {operation}")
            raise APIUnreachableError(self.endpoint) from e
        except requests.RequestException as e:
            safe_error_msg = self._sanitize_credentials(str(e), api_key)
            logger.error(f"API operation failed: {operation} - {safe_error_msg}")
            raise APIAccessError(f"Linear API failure during {operation}") from e

        if response.status_code == 401:
            raise InvalidCredentialsError("rejected by Linear", self.endpoint)

        try:
            payload = response.json()
        except ValueError as e:
            raise APIAccessError(
                f"Linear API failure during {operation}: HTTP {response.status_code}"
            ) from e

        errors = payload.get('errors') if isinstance(payload, dict) else None
        if errors:
            self._raise_for_graphql_errors(errors, operation, api_key)

        if response.status_code >= 400:
            raise APIAccessError(
                f"Linear API failure during {operation}: HTTP {response.status_code}"
            )

        data = payload.get('data') if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise APIAccessError(f"Linear API returned no data for {operation}")
        return data

    def _raise_for_graphql_errors(self, errors: Any, operation: str, api_key: str) -> None:
        messages = []
        for error in errors if isinstance(errors, list) else [errors]:
            if not isinstance(error, dict):
                messages.append(str(error))
                continue
            message = str(error.get('message', ''))
            extensions = error.get('extensions') or {}
            code = str(extensions.get('code', '')).upper()
            lowered = message.lower()

            if code == 'AUTHENTICATION_ERROR' or 'authentication' in lowered:
                raise InvalidCredentialsError("rejected by Linear", self.endpoint)
            if 'not found' in lowered or code == 'ENTITY_NOT_FOUND':
                raise _EntityNotFound(message)
            messages.append(message)

        safe_error_msg = self._sanitize_credentials('; '.join(messages), api_key)
        logger.error(f"API operation failed: {operation} - {safe_error_msg}")
        raise APIAccessError(f"Linear API failure during {operation}: {safe_error_msg}")

    def viewer(self) -> Dict[str, Any]:
        """Fetch the authenticated user, validating the API key.

        Returns:
            Dict with the viewer's id, name and email
        """
        data = self._execute(VIEWER_QUERY, {}, "viewer")
        return data.get('viewer') or {}

    def team_names(self) -> List[str]:
        """Return the names of all teams visible to the API key."""
        data = self._execute(TEAMS_QUERY, {}, "teams")
        nodes = (data.get('teams') or {}).get('nodes') or []
        return [node['name'] for node in nodes if isinstance(node, dict) and node.get('name')]

    def fetch_issue(self, issue_id: str) -> Optional[IssueRecord]:
        """Fetch an issue by UUID or ticket identifier.

        Args:
            issue_id: Linear issue id or human identifier (e.g. "ABC-12")

        Returns:
            IssueRecord, or None if the issue does not exist
        """
        try:
            data = self._execute(ISSUE_QUERY, {'id': issue_id}, f"fetch_issue({issue_id})")
        except _EntityNotFound:
            return None
        node = data.get('issue')
        return IssueRecord.from_api(node) if node else None

    def fetch_document(self, document_id: str) -> Optional[DocumentRecord]:
        """Fetch a document by id or slug.

        Args:
            document_id: Linear document id

        Returns:
            DocumentRecord, or None if the document does not exist
        """
        try:
            data = self._execute(DOCUMENT_QUERY, {'id': document_id}, f"fetch_document({document_id})")
        except _EntityNotFound:
            return None
        node = data.get('document')
        return DocumentRecord.from_api(node) if node else None

    def update_issue(self, issue_id: str, title: str, description: str) -> None:
        """Set an issue's title and description.

        Raises:
            RemoteUpdateFailedError: If the update is rejected or the call fails
        """
        self._update(
            RecordType.ISSUE,
            issue_id,
            ISSUE_UPDATE_MUTATION,
            'issueUpdate',
            {'title': title, 'description': description},
        )

    def update_document(self, document_id: str, title: str, content: str) -> None:
        """Set a document's title and content.

        Raises:
            RemoteUpdateFailedError: If the update is rejected or the call fails
        """
        self._update(
            RecordType.DOCUMENT,
            document_id,
            DOCUMENT_UPDATE_MUTATION,
            'documentUpdate',
            {'title': title, 'content': content},
        )

    def _update(
        self,
        record_type: RecordType,
        record_id: str,
        mutation: str,
        field_name: str,
        update_input: Dict[str, Any],
    ) -> None:
        operation = f"{field_name}({record_id})"
        try:
            data = self._execute(mutation, {'id': record_id, 'input': update_input}, operation)
        except _EntityNotFound as e:
            raise RemoteUpdateFailedError(record_type.value, record_id, str(e)) from e
        except LinearError as e:
            raise RemoteUpdateFailedError(record_type.value, record_id, str(e)) from e

        result = data.get(field_name) or {}
        if not result.get('success'):
            raise RemoteUpdateFailedError(
                record_type.value, record_id, "Linear reported success=false"
            )
        logger.debug(f"Linear API update succeeded: {operation}")
