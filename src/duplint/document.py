from dataclasses import dataclass

from .index.binary import is_text_file


@dataclass(frozen=True)
class Document:
    """A document read into memory.

    Attributes:
        path: Identity of the document within a run, as shown in findings
        content: Decoded text, or the raw bytes of a binary document. A binary document may also be
                 given as text, which is then treated as its UTF-8 encoding
    """
    path: str
    content: str | bytes

    @classmethod
    def from_bytes(cls, path: str, data: bytes) -> 'Document':
        """Decode data as UTF-8 unless path has a binary extension.

        Raises:
            UnicodeDecodeError: A text document is not valid UTF-8
        """
        if is_text_file(path):
            return cls(path, data.decode('utf-8'))
        return cls(path, data)

    @property
    def is_binary(self) -> bool:
        """Whether the path has a binary extension, whatever type content has."""
        return not is_text_file(self.path)
