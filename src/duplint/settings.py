import tomllib
from pathlib import Path

SETTINGS_FILE_NAME = '.duplint.toml'


class ScanSettings:
    """Read-only view of a duplint settings file.

    Loads ``.duplint.toml`` (or an explicitly given TOML file) and exposes its raw contents
    through dot-notation keys. Interpreting and validating values is left to the caller;
    see :func:`duplint.config.configure`.

    Example:
        settings = ScanSettings.discover(Path.cwd())
        threshold = settings.get('threshold', 95)
        log_path = settings.get('logging.path')
    """

    def __init__(self, data: dict | None = None, path: Path | None = None):
        self._settings = data or {}
        self.path = path

    @classmethod
    def load(cls, path: Path) -> 'ScanSettings':
        """Load settings from a TOML file that must exist.

        Raises:
            FileNotFoundError: The file does not exist
            tomllib.TOMLDecodeError: The file is not valid TOML
        """
        with open(path, 'rb') as f:
            return cls(tomllib.load(f), path)

    @classmethod
    def discover(cls, directory: Path) -> 'ScanSettings':
        """Load ``.duplint.toml`` from directory, or return empty settings if there is none."""
        settings_file = directory / SETTINGS_FILE_NAME
        if settings_file.is_file():
            return cls.load(settings_file)
        return cls()

    def get(self, key: str, default=None):
        """Get a setting by dot-notation key (``'logging.path'`` reads ``[logging] path``).

        Returns default when any component of the key path is missing or an intermediate
        value is not a table.
        """
        value = self._settings
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def as_dict(self) -> dict:
        return dict(self._settings)
