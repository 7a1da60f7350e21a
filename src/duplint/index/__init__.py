from .segmenter import Block, segment, qualifying_blocks, normalize, count_lines
from .fingerprint import ContentAddresser, Fingerprint, HASH_ALGORITHMS
from .binary import is_text_file
from .document_index import DocumentIndex, DocumentIndexEntry
from .block_index import BlockIndex
