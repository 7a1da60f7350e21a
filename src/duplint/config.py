"""Configuration provider: defaults, settings-file values and overrides merged into a ScanConfig."""

import logging
import multiprocessing
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .errors import ConfigurationError
from .index.fingerprint import HASH_ALGORITHMS, DEFAULT_HASH_ALGORITHM
from .settings import ScanSettings

logger = logging.getLogger(__name__)

DEFAULT_FILES = ('**/*.*',)
DEFAULT_IGNORE = ('node_modules/**', 'bower_components/**', '.git/**')

# Settings-file tables that are not scan options.
_NON_SCAN_TABLES = {'logging'}


@dataclass(frozen=True)
class ScanConfig:
    """Options of a single duplication scan.

    Attributes:
        files: Glob patterns selecting the documents to analyze
        ignore: Glob patterns of paths to leave out, matched against root-relative paths
        threshold: Minimum duplication score (0-100) for the scan to pass
        min_lines: Minimum number of newline characters a block needs to be compared
        min_chars: A block must be strictly longer than this many characters to be compared
        hash_algorithm: Name of the fingerprint algorithm, see HASH_ALGORITHMS
        concurrency: Number of workers reading documents; None means one per CPU
        exit_on_failure: Whether the CLI should exit non-zero when the scan fails its threshold
    """
    files: tuple[str, ...] = DEFAULT_FILES
    ignore: tuple[str, ...] = DEFAULT_IGNORE
    threshold: float = 95
    min_lines: int = 4
    min_chars: int = 100
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    concurrency: int | None = None
    exit_on_failure: bool = True

    def __post_init__(self):
        self.validate()

    @property
    def worker_count(self) -> int:
        return self.concurrency if self.concurrency is not None else multiprocessing.cpu_count()

    def validate(self) -> None:
        """Check every option, raising ConfigurationError on the first invalid one."""
        if not _is_real(self.threshold) or not 0 <= self.threshold <= 100:
            raise ConfigurationError(f"threshold must be a number between 0 and 100, got {self.threshold!r}")
        for name in ('min_lines', 'min_chars'):
            value = getattr(self, name)
            if not _is_int(value) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative integer, got {value!r}")
        _check_patterns('files', self.files, allow_empty=False)
        _check_patterns('ignore', self.ignore, allow_empty=True)
        if self.hash_algorithm not in HASH_ALGORITHMS:
            raise ConfigurationError(
                f"Unknown hash algorithm: {self.hash_algorithm!r} (expected one of {', '.join(HASH_ALGORITHMS)})")
        if self.concurrency is not None and (not _is_int(self.concurrency) or self.concurrency < 1):
            raise ConfigurationError(f"concurrency must be a positive integer, got {self.concurrency!r}")
        if not isinstance(self.exit_on_failure, bool):
            raise ConfigurationError(f"exit_on_failure must be a boolean, got {self.exit_on_failure!r}")


_OPTION_NAMES = frozenset(f.name for f in fields(ScanConfig))


def configure(overrides: Mapping[str, Any] | None = None, *,
              settings: ScanSettings | None = None,
              settings_path: Path | None = None,
              root: Path | None = None) -> ScanConfig:
    """Build a validated ScanConfig.

    Values are merged with increasing precedence: built-in defaults, the settings file, then
    overrides (CLI options or a programmatic mapping). Override entries that are None are treated
    as not given. Ignore patterns from the settings file and overrides extend the default ignore
    list instead of replacing it.

    Args:
        overrides: Option values taking precedence over the settings file
        settings: Already loaded settings; takes priority over settings_path and discovery
        settings_path: Explicit settings file, which must exist
        root: Directory searched for .duplint.toml when neither settings nor settings_path is given

    Raises:
        ConfigurationError: An option is unknown or has an invalid value
        FileNotFoundError: settings_path does not exist
    """
    if settings is None:
        if settings_path is not None:
            settings = ScanSettings.load(settings_path)
        else:
            settings = ScanSettings.discover(root if root is not None else Path.cwd())

    merged: dict[str, Any] = {}
    ignore = list(DEFAULT_IGNORE)

    for source, values in (('settings file', _settings_options(settings)), ('overrides', overrides or {})):
        for key, value in values.items():
            if value is None:
                continue
            if key not in _OPTION_NAMES:
                raise ConfigurationError(f"Unknown option in {source}: {key!r}")
            if key == 'ignore':
                _check_patterns('ignore', value, allow_empty=True)
                ignore.extend(p for p in value if p not in ignore)
            elif key == 'files':
                merged[key] = (value,) if isinstance(value, str) else value
            else:
                merged[key] = value

    if 'files' in merged:
        _check_patterns('files', merged['files'], allow_empty=False)
        merged['files'] = tuple(merged['files'])

    config = ScanConfig(ignore=tuple(ignore), **merged)
    logger.info(f"Configured scan: threshold={config.threshold}, min_lines={config.min_lines}, "
                f"min_chars={config.min_chars}, hash={config.hash_algorithm}, files={list(config.files)}")
    return config


def _settings_options(settings: ScanSettings) -> dict[str, Any]:
    return {k: v for k, v in settings.as_dict().items() if k not in _NON_SCAN_TABLES}


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and value == value


def _check_patterns(name: str, value, *, allow_empty: bool) -> None:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"{name} must be a list of glob patterns, got {value!r}")
    if not value and not allow_empty:
        raise ConfigurationError(f"{name} must contain at least one glob pattern")
    for pattern in value:
        if not isinstance(pattern, str) or not pattern:
            raise ConfigurationError(f"{name} entries must be non-empty strings, got {pattern!r}")
