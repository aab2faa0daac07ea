"""Sync command orchestration for CLI.

This module provides the SyncCommand class that runs a single pull or push
for the CLI, updates settings, and translates errors from the engine and the
Linear client into exit codes and user-facing messages.
"""

import logging
from typing import Any, List, Optional, Tuple

import yaml

from src.cli.errors import CLIError, InvalidSettingError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.linear_client.api_wrapper import LinearAPI
from src.linear_client.auth import Authenticator
from src.linear_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    RecordNotFoundError,
    RemoteUpdateFailedError,
)
from src.sync_engine.config_store import ConfigStore
from src.sync_engine.errors import FilesystemError, SyncEngineError
from src.sync_engine.sync_actions import SyncActionProvider
from src.sync_engine.sync_orchestrator import SyncOrchestrator

logger = logging.getLogger(__name__)


class SyncCommand:
    """Runs CLI operations against one markdown file.

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> sync_cmd = SyncCommand(output_handler=output)
        >>> exit_code = sync_cmd.pull("notes/ABC-12.md")
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        config_path: str = ConfigStore.DEFAULT_CONFIG_PATH,
        config_store: Optional[ConfigStore] = None,
        orchestrator: Optional[SyncOrchestrator] = None,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        api: Optional[LinearAPI] = None,
    ):
        """Initialize sync command with dependencies.

        Args:
            config_path: Path to the settings YAML file
            config_store: ConfigStore for settings (optional)
            orchestrator: SyncOrchestrator for pull/push (optional)
            output_handler: OutputHandler for terminal output (optional)
            authenticator: Authenticator for the Linear API (optional)
            api: LinearAPI client (optional)

        Note:
            All dependencies are optional to support testing. The Linear
            client is only created when an operation needs it.
        """
        self.config_path = config_path
        self.config_store = config_store or ConfigStore(config_path)
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator
        self.api = api
        self.orchestrator = orchestrator

    def _get_api(self) -> LinearAPI:
        if self.api is None:
            self.api = LinearAPI(self.authenticator or Authenticator())
        return self.api

    def _get_orchestrator(self) -> SyncOrchestrator:
        if self.orchestrator is None:
            self.orchestrator = SyncOrchestrator(self._get_api(), self.config_store)
        return self.orchestrator

    def _handle_error(self, error: Exception, action: str) -> ExitCode:
        """Report an error and map it to an exit code."""
        if isinstance(error, InvalidCredentialsError):
            logger.error(f"Authentication failed: {error}")
            self.output_handler.error(f"Authentication failed: {error}")
            self.output_handler.warning("Set LINEAR_API_KEY (lin_api_*) in the environment or a .env file")
            return ExitCode.AUTH_ERROR

        if isinstance(error, (APIUnreachableError, APIAccessError)):
            logger.error(f"Linear API error: {error}")
            self.output_handler.error(f"Linear API error: {error}")
            return ExitCode.NETWORK_ERROR

        if isinstance(error, RecordNotFoundError):
            logger.error(str(error))
            self.output_handler.error(f"Error {action}: {error}")
            return ExitCode.NOT_FOUND

        if isinstance(error, RemoteUpdateFailedError):
            logger.error(str(error))
            self.output_handler.error(f"Error {action}: {error}")
            return ExitCode.UPDATE_FAILED

        if isinstance(error, (SyncEngineError, CLIError)):
            logger.error(str(error))
            self.output_handler.error(f"Error {action}: {error}")
            return ExitCode.GENERAL_ERROR

        logger.exception(f"Unexpected error {action}")
        self.output_handler.error(f"Unexpected error: {error}")
        return ExitCode.GENERAL_ERROR

    def pull(self, file_path: str) -> ExitCode:
        """Pull a file's Linear record into it (Linear -> local)."""
        try:
            orchestrator = self._get_orchestrator()
            with self.output_handler.spinner("Syncing down from Linear..."):
                result = orchestrator.pull(file_path)
        except Exception as e:
            return self._handle_error(e, "updating the file")

        self.output_handler.print_pull_result(result)
        return ExitCode.SUCCESS

    def push(self, file_path: str) -> ExitCode:
        """Push a file's title and body to its Linear record (local -> Linear)."""
        try:
            orchestrator = self._get_orchestrator()
            with self.output_handler.spinner("Syncing up to Linear..."):
                result = orchestrator.push(file_path)
        except Exception as e:
            return self._handle_error(e, "updating the Linear content")

        self.output_handler.print_push_result(result)
        return ExitCode.SUCCESS

    def show_actions(self, file_path: str) -> ExitCode:
        """Print the inline sync actions a file offers."""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
            actions = SyncActionProvider(self.config_store).actions_for(content)
        except OSError as e:
            return self._handle_error(FilesystemError(file_path, 'read', str(e)), "reading the file")
        except Exception as e:
            return self._handle_error(e, "reading the file")

        self.output_handler.print_actions(file_path, actions)
        return ExitCode.SUCCESS

    @staticmethod
    def parse_assignment(assignment: str) -> Tuple[str, Any]:
        """Split KEY=VALUE, parsing VALUE as a YAML scalar or list.

        Raises:
            InvalidSettingError: If there is no '=' or the key is empty
        """
        key, sep, raw_value = assignment.partition('=')
        key = key.strip()
        if not sep or not key:
            raise InvalidSettingError(assignment)

        try:
            value = yaml.safe_load(raw_value)
        except yaml.YAMLError:
            value = raw_value
        return key, value

    def apply_settings(self, assignments: List[str]) -> ExitCode:
        """Validate and persist each KEY=VALUE setting."""
        try:
            for assignment in assignments:
                key, value = self.parse_assignment(assignment)
                self.config_store.set(key, value)
                self.output_handler.success(f"Set {key} = {value!r}")
        except Exception as e:
            return self._handle_error(e, "updating settings")
        return ExitCode.SUCCESS

    def check_auth(self) -> ExitCode:
        """Verify the API key against the Linear viewer endpoint."""
        try:
            api = self._get_api()
            with self.output_handler.spinner("Checking Linear API key..."):
                viewer = api.viewer()
        except Exception as e:
            return self._handle_error(e, "checking the API key")

        self.output_handler.success(
            f"Linear API key is valid (user: {viewer.get('name') or viewer.get('email') or 'unknown'})"
        )
        return ExitCode.SUCCESS
