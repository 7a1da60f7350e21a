"""Document source: selecting files by glob and reading them concurrently behind a barrier."""

import fnmatch
import glob
import logging
import os
from asyncio import Semaphore, TaskGroup
from pathlib import Path

from ..document import Document
from ..errors import DocumentReadError
from ..utils.processor import Processor

logger = logging.getLogger(__name__)


def select_paths(root: Path, patterns: list[str] | tuple[str, ...],
                 ignore: list[str] | tuple[str, ...] = ()) -> list[str]:
    """Expand glob patterns into the sorted list of files to analyze.

    Relative patterns are expanded against root and yield root-relative POSIX paths; absolute
    patterns yield absolute paths. Directories are skipped, as are paths matching an ignore
    pattern. The returned order is the processing order of the run.
    """
    selected: set[str] = set()
    for pattern in patterns:
        if os.path.isabs(pattern):
            matches = glob.glob(pattern, recursive=True)
        else:
            matches = glob.glob(pattern, root_dir=root, recursive=True)

        for match in matches:
            full_path = Path(match) if os.path.isabs(match) else root / match
            if not full_path.is_file():
                continue
            path = Path(match).as_posix()
            if _is_ignored(path, full_path, root, ignore):
                logger.debug(f"Ignoring {path}")
                continue
            selected.add(path)

    paths = sorted(selected)
    logger.info(f"Selected {len(paths)} files under {root}")
    return paths


def _is_ignored(path: str, full_path: Path, root: Path, ignore) -> bool:
    try:
        relative = full_path.relative_to(root).as_posix()
    except ValueError:
        relative = path
    return any(fnmatch.fnmatch(relative, pattern) or fnmatch.fnmatch(path, pattern) for pattern in ignore)


class DocumentReader:
    """Reads every selected file before any of them is compared.

    Reads run in the processor's workers with at most ``concurrency * 2`` in flight. The
    returned documents are in the order of the given paths regardless of completion order.
    """

    def __init__(self, processor: Processor, root: Path):
        self._processor = processor
        self._root = root
        self._in_flight = Semaphore(processor.concurrency * 2)

    async def read_all(self, paths: list[str]) -> list[Document]:
        """Read all paths.

        Raises:
            DocumentReadError: A file could not be read; remaining reads are cancelled
            UnicodeDecodeError: A text file is not valid UTF-8
        """
        try:
            async with TaskGroup() as tg:
                tasks = [tg.create_task(self._read(path)) for path in paths]
        except ExceptionGroup as group:
            raise group.exceptions[0]

        documents = [task.result() for task in tasks]
        logger.info(f"Read {len(documents)} documents")
        return documents

    async def _read(self, path: str) -> Document:
        full_path = Path(path) if os.path.isabs(path) else self._root / path
        try:
            async with self._in_flight:
                data = await self._processor.read(full_path)
        except OSError as e:
            raise DocumentReadError(path, e.strerror or str(e)) from e
        return Document.from_bytes(path, data)


async def do_read(processor: Processor, root: Path, patterns, ignore=()) -> list[Document]:
    """Select and read the documents of a run."""
    paths = select_paths(root, patterns, ignore)
    return await DocumentReader(processor, root).read_all(paths)
