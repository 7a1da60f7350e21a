"""Findings, their aggregation and the scored report.

This package contains:
- finding: the three finding kinds and their plain-text rendering
- aggregator: FindingAggregator, which merges matches into findings, and the RunState counters
- scorer: Report, the duplication score and pass/fail verdict
"""
from .finding import Finding, FindingKind, IdenticalFiles, IntraFileDuplicate, InterFileDuplicate, sort_findings
from .aggregator import FindingAggregator, RunState
from .scorer import Report, duplication_score
