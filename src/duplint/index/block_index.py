"""Block fingerprint index: which documents produced each qualifying block."""

from .fingerprint import Fingerprint


class BlockIndex:
    """Maps block fingerprints to the documents that produced a qualifying block with them.

    Documents are kept in first-seen order and each appears at most once per fingerprint.
    """

    def __init__(self):
        self._documents: dict[Fingerprint, dict[str, None]] = {}

    def __len__(self):
        return len(self._documents)

    def record(self, fingerprint: Fingerprint, path: str) -> list[str]:
        """Record that path produced a block with this fingerprint.

        Returns:
            The documents that had already produced the fingerprint before this call, in
            first-seen order. Empty when the fingerprint was unseen. If path is among them the
            block repeats within the same document and nothing new is recorded.
        """
        documents = self._documents.get(fingerprint)
        if documents is None:
            self._documents[fingerprint] = {path: None}
            return []
        matched = list(documents)
        documents.setdefault(path, None)
        return matched
