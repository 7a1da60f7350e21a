"""The comparison phase: a single sequential pass over documents that were all read beforehand."""

import logging
from typing import NamedTuple

from ..document import Document
from ..index.block_index import BlockIndex
from ..index.document_index import DocumentIndex
from ..index.fingerprint import ContentAddresser, DEFAULT_HASH_ALGORITHM
from ..index.segmenter import count_lines, normalize, qualifying_blocks
from ..report.aggregator import FindingAggregator, RunState
from ..report.finding import Finding

logger = logging.getLogger(__name__)


class CompareArgs(NamedTuple):
    """Arguments for the comparison phase."""
    min_lines: int = 4  # Minimum newline count of a compared block
    min_chars: int = 100  # A compared block must be longer than this
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM


class ComparisonResult(NamedTuple):
    findings: list[Finding]
    state: RunState


class ComparisonProcessor:
    """Owns the indexes, counters and findings of one comparison phase.

    Documents must be fed in a fixed order; the first document to produce a fingerprint is its
    reference for every later match. Nothing here is shared, so no locking is involved.
    """

    def __init__(self, args: CompareArgs):
        self._args = args
        self._addresser = ContentAddresser(args.hash_algorithm)
        self._documents = DocumentIndex()
        self._blocks = BlockIndex()
        self._state = RunState()
        self._aggregator = FindingAggregator(self._state)

    def run(self, documents: list[Document]) -> ComparisonResult:
        for document in documents:
            self.process(document)
        findings = self._aggregator.findings
        logger.info(f"Compared {self._state.total_files} documents: {len(findings)} findings, "
                    f"{self._state.file_duplicate_count} duplicate files, "
                    f"{self._state.block_duplicate_count} duplicate blocks "
                    f"({len(self._documents)} distinct documents, {len(self._blocks)} distinct blocks)")
        return ComparisonResult(findings, self._state)

    def process(self, document: Document) -> None:
        self._state.total_files += 1
        self._state.total_lines += count_lines(document.content)

        fingerprint = self._fingerprint_document(document)
        entry = self._documents.register(fingerprint, document.path)
        if entry is not None:
            # Full duplicates are reported once at file granularity; their blocks are not scanned.
            self._aggregator.record_identical_file(
                entry, document.path, fingerprint, count_lines(document.content))
            return

        # Binary documents and raw bytes are never segmented.
        if document.is_binary or isinstance(document.content, bytes):
            return

        self._scan_blocks(document)

    def _fingerprint_document(self, document: Document) -> str:
        content = document.content
        if isinstance(content, bytes):
            return self._addresser.fingerprint_bytes(content)
        if document.is_binary:
            return self._addresser.fingerprint_bytes(content.encode('utf-8'))
        return self._addresser.fingerprint_text(normalize(content))

    def _scan_blocks(self, document: Document) -> None:
        path = document.path
        for block in qualifying_blocks(document.content, self._args.min_lines, self._args.min_chars):
            fingerprint = self._addresser.fingerprint_text(block.normalized)
            matched = self._blocks.record(fingerprint, path)
            if not matched:
                continue

            if path in matched:
                self._aggregator.record_intra_file(path, fingerprint, block.text, block.line_count)
            else:
                self._aggregator.record_inter_file(
                    matched + [path], path, fingerprint, block.text, block.line_count)


def do_compare(documents: list[Document], args: CompareArgs) -> ComparisonResult:
    """Compare documents in the given order and return the findings with the run counters."""
    return ComparisonProcessor(args).run(documents)
