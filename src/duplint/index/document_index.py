"""Whole-document fingerprint index used to recognize files that duplicate an earlier file."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .fingerprint import Fingerprint

if TYPE_CHECKING:
    from ..report.finding import IdenticalFiles


@dataclass
class DocumentIndexEntry:
    """First document seen with a given whole-document fingerprint.

    Attributes:
        first_document: Path of the document that first produced the fingerprint
        finding: The IdenticalFiles finding for this fingerprint, set when a second document
                 with the same fingerprint is seen
    """
    first_document: str
    finding: 'IdenticalFiles | None' = None


class DocumentIndex:
    """Maps whole-document fingerprints to the first document that produced them."""

    def __init__(self):
        self._entries: dict[Fingerprint, DocumentIndexEntry] = {}

    def __len__(self):
        return len(self._entries)

    def register(self, fingerprint: Fingerprint, path: str) -> DocumentIndexEntry | None:
        """Record path as the first document with this fingerprint.

        Returns:
            None when the fingerprint was unseen and path is now its first document, or the
            existing entry when path duplicates an earlier document (the entry is left unchanged).
        """
        entry = self._entries.get(fingerprint)
        if entry is not None:
            return entry
        self._entries[fingerprint] = DocumentIndexEntry(path)
        return None
