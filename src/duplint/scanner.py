import asyncio
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .commands.compare import CompareArgs, do_compare
from .commands.read import do_read
from .config import ScanConfig, configure
from .document import Document
from .report.scorer import Report
from .utils.processor import Processor

logger = logging.getLogger(__name__)


class Scanner:
    """Runs a duplication scan: read, compare, then report.

    Reading may happen concurrently, but comparison only starts once every document has been
    read, and then proceeds sequentially in the sorted path order. The scanner never prints and
    never exits; the returned Report is for the caller to present and act on.
    """

    def __init__(self, config: ScanConfig | None = None, root: str | Path | None = None):
        """Initialize the scanner.

        Args:
            config: Validated scan options; defaults apply when None
            root: Directory relative glob patterns are expanded against, the current directory
                  when None
        """
        self._config = config if config is not None else ScanConfig()
        self._root = Path(root) if root is not None else Path.cwd()

    @property
    def config(self) -> ScanConfig:
        return self._config

    def scan(self, processor: Processor | None = None) -> Report:
        """Select and read the configured files, then compare and score them.

        Args:
            processor: Worker pool used for reading; a pool sized by the configured concurrency
                       is created and closed when None

        Raises:
            DocumentReadError: A selected file could not be read (no partial report is produced)
            EmptyCorpusError: No lines were analyzed
        """
        if processor is None:
            with Processor(self._config.worker_count) as processor:
                documents = self._read(processor)
        else:
            documents = self._read(processor)
        return self.analyze(documents)

    def analyze(self, documents: Iterable[Document]) -> Report:
        """Compare documents that are already in memory, in the given order, and score them."""
        documents = list(documents)
        logger.info(f"Comparing {len(documents)} documents")
        result = do_compare(documents, CompareArgs(
            self._config.min_lines,
            self._config.min_chars,
            self._config.hash_algorithm,
        ))
        return Report.build(result.state, result.findings, self._config.threshold)

    def _read(self, processor: Processor) -> list[Document]:
        return asyncio.run(do_read(processor, self._root, self._config.files, self._config.ignore))


def scan(overrides: Mapping[str, Any] | None = None, *, root: str | Path | None = None,
         settings_path: str | Path | None = None) -> Report:
    """Configure and run a scan in one call.

    Args:
        overrides: Option values taking precedence over the settings file, e.g.
                   ``{'files': ['docs/**/*.md'], 'threshold': 90}``
        root: Scan root, also searched for .duplint.toml; the current directory when None
        settings_path: Explicit settings file to use instead of the discovered one
    """
    root = Path(root) if root is not None else Path.cwd()
    config = configure(overrides, settings_path=Path(settings_path) if settings_path is not None else None,
                       root=root)
    return Scanner(config, root).scan()


def detect_duplicates(documents: Iterable[Document], config: ScanConfig | None = None) -> Report:
    """Score documents that are already in memory."""
    return Scanner(config).analyze(documents)
