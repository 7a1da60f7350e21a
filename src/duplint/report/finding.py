"""Findings: aggregated, de-duplicated reports of one duplicate relationship among files."""

from enum import StrEnum

from ..index.fingerprint import Fingerprint


class FindingKind(StrEnum):
    IDENTICAL_FILE = 'identical_file'
    INTRA_FILE_DUPLICATE = 'intra_file_duplicate'
    INTER_FILE_DUPLICATE = 'inter_file_duplicate'


class Finding:
    """Base class of the three finding kinds.

    Attributes:
        participant_files: Paths involved, in insertion order and without repeats.
        fingerprints: Fingerprints of the duplicated content.
        occurrences: Original text of the duplicated blocks, shown when reporting. Identical-file
                     findings carry no text.
    """
    kind: FindingKind
    phrase: str

    def __init__(self, participant_files: list[str], fingerprints: list[Fingerprint] | None = None,
                 occurrences: list[str] | None = None):
        self.participant_files: list[str] = []
        for path in participant_files:
            self.add_participant(path)
        self.fingerprints: list[Fingerprint] = list(fingerprints or [])
        self.occurrences: list[str] = list(occurrences or [])

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(participant_files={self.participant_files!r}, "
                f"fingerprints={self.fingerprints!r})")

    def add_participant(self, path: str) -> bool:
        """Add path unless it already participates. Returns whether it was added."""
        if path in self.participant_files:
            return False
        self.participant_files.append(path)
        return True

    def add_content(self, fingerprint: Fingerprint, text: str) -> None:
        self.fingerprints.append(fingerprint)
        self.occurrences.append(text)

    def title(self) -> str:
        return f"{join_paths(self.participant_files)} {self.phrase}"

    def payloads(self) -> list[str]:
        """Non-empty occurrences, in the order they were recorded."""
        return [text for text in self.occurrences if text]

    def to_plain_text(self) -> str:
        """Render the finding as a title line followed by a numbered list of its payloads."""
        lines = [self.title()]
        for number, text in enumerate(self.payloads(), 1):
            lines.append(f"{number}.)\n\t{text}")
        return '\n'.join(lines) + '\n'


class IdenticalFiles(Finding):
    """Two or more documents whose whole normalized content is identical."""
    kind = FindingKind.IDENTICAL_FILE
    phrase = 'are IDENTICAL'

    def __init__(self, participant_files: list[str], fingerprint: Fingerprint):
        super().__init__(participant_files, [fingerprint])


class IntraFileDuplicate(Finding):
    """Blocks repeated within a single document. Each repeat adds one occurrence."""
    kind = FindingKind.INTRA_FILE_DUPLICATE
    phrase = 'repeats the following within the file:'

    def __init__(self, path: str):
        super().__init__([path])


class InterFileDuplicate(Finding):
    """Blocks shared by exactly the same set of two or more documents.

    Each fingerprint appears once, with the text of the block that first completed the match.
    """
    kind = FindingKind.INTER_FILE_DUPLICATE
    phrase = 'repeat the following:'

    @property
    def file_set(self) -> frozenset[str]:
        return frozenset(self.participant_files)

    def remove_fingerprint(self, fingerprint: Fingerprint) -> str:
        """Detach fingerprint and its text from this finding, returning the text."""
        index = self.fingerprints.index(fingerprint)
        del self.fingerprints[index]
        return self.occurrences.pop(index)


# Presentation order: identical files come last so that they are the most visible at the end of output.
KIND_ORDER = {
    FindingKind.INTRA_FILE_DUPLICATE: 0,
    FindingKind.INTER_FILE_DUPLICATE: 1,
    FindingKind.IDENTICAL_FILE: 2,
}


def sort_findings(findings: list[Finding]) -> list[Finding]:
    """Group findings by kind, identical files last. Order within a kind is preserved."""
    return sorted(findings, key=lambda finding: KIND_ORDER[finding.kind])


def join_paths(paths: list[str]) -> str:
    """``a``, ``a and b``, ``a, b and c``."""
    if len(paths) <= 1:
        return ''.join(paths)
    return f"{', '.join(paths[:-1])} and {paths[-1]}"
