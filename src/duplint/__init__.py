from .scanner import Scanner, scan, detect_duplicates
from .config import ScanConfig, configure
from .document import Document
from .errors import DuplintError, ConfigurationError, EmptyCorpusError, DocumentReadError
from .report.finding import Finding, FindingKind, IdenticalFiles, IntraFileDuplicate, InterFileDuplicate
from .report.aggregator import RunState
from .report.scorer import Report
