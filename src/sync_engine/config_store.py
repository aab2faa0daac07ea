"""YAML configuration store for sync settings.

This module handles reading and writing the sync settings kept in
``.linear-md/config.yaml``. The file is re-read on every access so edits made
between two sync calls take effect immediately; nothing is cached.
"""

import logging
import os
from typing import Any, Callable, Dict, List

import yaml

from .errors import ConfigError, FilesystemError
from .models import DateFormat, DirectoryMode, TemplateConfig

logger = logging.getLogger(__name__)

ChangeListener = Callable[[str, Any], None]


class ConfigStore:
    """Key-value settings store backed by a YAML file.

    Configuration file structure:
        enable_sync_actions: true
        filename_format: "${id}-${title}.md"
        date_format: YMD
        create_directory: true
        directory_format: team
        skip_frontmatter: false
        custom_frontmatter_fields:
          - team.name
          - state.name

    A missing file means all defaults. Listeners registered with on_change
    are notified after every successful set().
    """

    DEFAULT_CONFIG_PATH = '.linear-md/config.yaml'

    DEFAULTS: Dict[str, Any] = {
        'enable_sync_actions': True,
        'filename_format': '${title}.md',
        'date_format': DateFormat.YMD.value,
        'create_directory': False,
        'directory_format': DirectoryMode.NONE.value,
        'skip_frontmatter': False,
        'custom_frontmatter_fields': [],
    }

    BOOLEAN_FIELDS = {'enable_sync_actions', 'create_directory', 'skip_frontmatter'}

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self.config_path = config_path
        self._listeners: List[ChangeListener] = []

    def _read(self) -> Dict[str, Any]:
        """Read the raw settings mapping from disk.

        Raises:
            FilesystemError: If the file exists but cannot be read
            ConfigError: If the file is not a valid YAML mapping
        """
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return {}
        except PermissionError:
            raise FilesystemError(self.config_path, 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(self.config_path, 'read', str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return {}

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        unknown = set(config_dict) - set(self.DEFAULTS)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(sorted(unknown))}")

        return config_dict

    def _write(self, config_dict: Dict[str, Any]) -> None:
        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(self.config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(config_dir, 'create_directory', str(e))

        try:
            with open(self.config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(self.config_path, 'write', 'Permission denied')
        except OSError as e:
            raise FilesystemError(self.config_path, 'write', str(e))

    @classmethod
    def _validate(cls, key: str, value: Any) -> Any:
        """Validate and normalize a single setting.

        Raises:
            ConfigError: If the key is unknown or the value has the wrong type
        """
        if key not in cls.DEFAULTS:
            raise ConfigError(f"Unknown setting '{key}'", key)

        if key in cls.BOOLEAN_FIELDS:
            if not isinstance(value, bool):
                raise ConfigError(f"must be true or false, got {value!r}", key)
            return value

        if key == 'filename_format':
            if not isinstance(value, str) or not value.strip():
                raise ConfigError("must be a non-empty string", key)
            return value

        if key == 'date_format':
            try:
                return DateFormat(value).value
            except ValueError:
                allowed = ', '.join(f.value for f in DateFormat)
                raise ConfigError(f"must be one of {allowed}, got {value!r}", key)

        if key == 'directory_format':
            try:
                return DirectoryMode(value).value
            except ValueError:
                allowed = ', '.join(m.value for m in DirectoryMode)
                raise ConfigError(f"must be one of {allowed}, got {value!r}", key)

        # custom_frontmatter_fields
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ConfigError("must be a list of attribute paths", key)
        return [item.strip() for item in value if item.strip()]

    def get(self, key: str, default: Any = None) -> Any:
        """Return a setting, falling back to the given default or the built-in one."""
        config_dict = self._read()
        value = config_dict.get(key)
        if value is None:
            return default if default is not None else self.DEFAULTS.get(key)
        return value

    def set(self, key: str, value: Any) -> None:
        """Validate, persist, and announce a setting change.

        Raises:
            ConfigError: If the key or value is invalid
            FilesystemError: If the file cannot be written
        """
        value = self._validate(key, value)
        config_dict = self._read()
        config_dict[key] = value
        self._write(config_dict)
        logger.info(f"Setting '{key}' updated in {self.config_path}")

        for listener in list(self._listeners):
            listener(key, value)

    def on_change(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            Callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> TemplateConfig:
        """Read the settings once and freeze them for a single sync call.

        Raises:
            ConfigError: If a setting has an invalid value
        """
        config_dict = {**self.DEFAULTS, **{
            key: value for key, value in self._read().items()
            if key in self.DEFAULTS and value is not None
        }}

        try:
            date_format = DateFormat(config_dict['date_format'])
        except ValueError:
            logger.warning(
                f"Unknown date_format {config_dict['date_format']!r}, using {DateFormat.YMD.value}"
            )
            date_format = DateFormat.YMD

        create_directory = self._validate('create_directory', config_dict['create_directory'])
        directory_mode = DirectoryMode(
            self._validate('directory_format', config_dict['directory_format'])
        )

        return TemplateConfig(
            filename_format=self._validate('filename_format', config_dict['filename_format']),
            date_format=date_format,
            directory_mode=directory_mode if create_directory else DirectoryMode.NONE,
            skip_frontmatter=self._validate('skip_frontmatter', config_dict['skip_frontmatter']),
            custom_fields=tuple(
                self._validate('custom_frontmatter_fields', config_dict['custom_frontmatter_fields'])
            ),
            enable_sync_actions=self._validate('enable_sync_actions', config_dict['enable_sync_actions']),
        )
