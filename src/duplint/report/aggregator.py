"""Turning raw matches into a minimal set of findings while keeping the run counters."""

import logging
from dataclasses import dataclass

from ..index.document_index import DocumentIndexEntry
from ..index.fingerprint import Fingerprint
from .finding import Finding, IdenticalFiles, InterFileDuplicate, IntraFileDuplicate

logger = logging.getLogger(__name__)


@dataclass
class RunState:
    """Counters of one scan. Created at the start of the comparison phase and read once by the scorer."""
    total_files: int = 0
    total_lines: int = 0
    duped_lines: int = 0
    file_duplicate_count: int = 0
    block_duplicate_count: int = 0
    block_duplicate_in_same_file_count: int = 0


class FindingAggregator:
    """Collects findings so that each duplicate relationship is reported exactly once.

    Merge keys:
    - IdenticalFiles: the whole-document fingerprint, through its DocumentIndexEntry.
    - IntraFileDuplicate: the single file.
    - InterFileDuplicate: the exact set of participating files. A finding groups every block
      fingerprint shared by exactly that set, and every fingerprint belongs to exactly one
      finding. When another file joins a fingerprint, the fingerprint moves to the finding of the
      enlarged set.

    Findings are kept in creation order, which follows document and block processing order.
    """

    def __init__(self, state: RunState):
        self._state = state
        self._findings: list[Finding] = []
        self._intra_by_path: dict[str, IntraFileDuplicate] = {}
        self._inter_by_file_set: dict[frozenset[str], InterFileDuplicate] = {}
        self._inter_by_fingerprint: dict[Fingerprint, InterFileDuplicate] = {}

    @property
    def findings(self) -> list[Finding]:
        return list(self._findings)

    @property
    def state(self) -> RunState:
        return self._state

    def record_identical_file(self, entry: DocumentIndexEntry, path: str, fingerprint: Fingerprint,
                              line_count: int) -> IdenticalFiles:
        """Record that path is a full duplicate of entry.first_document."""
        if entry.finding is None:
            entry.finding = IdenticalFiles([path, entry.first_document], fingerprint)
            self._findings.append(entry.finding)
        else:
            entry.finding.add_participant(path)

        self._state.duped_lines += line_count
        self._state.file_duplicate_count += 1
        logger.debug(f"{path} is identical to {entry.first_document}")
        return entry.finding

    def record_intra_file(self, path: str, fingerprint: Fingerprint, text: str,
                          line_count: int) -> IntraFileDuplicate:
        """Record a block repeated within path. The repeated occurrence is the one recorded."""
        finding = self._intra_by_path.get(path)
        if finding is None:
            finding = IntraFileDuplicate(path)
            self._intra_by_path[path] = finding
            self._findings.append(finding)
        finding.add_content(fingerprint, text)

        self._state.duped_lines += line_count
        self._state.block_duplicate_count += 1
        self._state.block_duplicate_in_same_file_count += 1
        logger.debug(f"Block {fingerprint} repeats within {path}")
        return finding

    def record_inter_file(self, documents: list[str], path: str, fingerprint: Fingerprint, text: str,
                          line_count: int) -> InterFileDuplicate:
        """Record that path shares a block with the other documents.

        Args:
            documents: Every document that has produced the block, path included, in first-seen order
            path: The document whose block completed this match
            fingerprint: Fingerprint of the block
            text: Original text of the block in path
            line_count: Number of lines credited as duplicated
        """
        file_set = frozenset(documents)
        current = self._inter_by_fingerprint.get(fingerprint)
        target = self._inter_by_file_set.get(file_set)

        if current is not None:
            if target is None and len(current.fingerprints) == 1:
                # The fingerprint is all this finding reports: grow it to the new file-set in place.
                del self._inter_by_file_set[current.file_set]
                current.add_participant(path)
                self._inter_by_file_set[file_set] = current
                target = current
            else:
                text = current.remove_fingerprint(fingerprint)
                if not current.fingerprints:
                    self._drop(current)

        if target is None:
            target = InterFileDuplicate(documents)
            self._inter_by_file_set[file_set] = target
            self._findings.append(target)

        if fingerprint not in target.fingerprints:
            target.add_content(fingerprint, text)
        self._inter_by_fingerprint[fingerprint] = target

        self._state.duped_lines += line_count
        self._state.block_duplicate_count += 1
        logger.debug(f"Block {fingerprint} shared by {', '.join(documents)}")
        return target

    def _drop(self, finding: InterFileDuplicate) -> None:
        del self._inter_by_file_set[finding.file_set]
        self._findings.remove(finding)
