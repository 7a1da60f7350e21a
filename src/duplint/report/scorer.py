"""Scoring a finished comparison against the failure threshold."""

import logging
from dataclasses import dataclass, field

from ..errors import EmptyCorpusError
from .aggregator import RunState
from .finding import Finding, sort_findings

logger = logging.getLogger(__name__)


def duplication_score(state: RunState) -> float:
    """Percentage of analyzed lines not flagged as duplicated, rounded to two decimals.

    Raises:
        EmptyCorpusError: No lines were analyzed, so the score is undefined
    """
    if state.total_lines == 0:
        raise EmptyCorpusError(state.total_files)
    return round(100 - (state.duped_lines / state.total_lines * 100), 2)


def summarize(state: RunState) -> dict[str, int]:
    return {
        'Files Analyzed': state.total_files,
        'Lines Analyzed': state.total_lines,
        'Duplicate Files': state.file_duplicate_count,
        'Duplicate Lines': state.duped_lines,
        'Duplicate Blocks': state.block_duplicate_count,
        'Duplicate Blocks Within Files': state.block_duplicate_in_same_file_count,
    }


@dataclass
class Report:
    """Outcome of a scan, handed to the presenter and to the caller deciding the exit status.

    Attributes:
        score: Duplication score (0-100, two decimals)
        threshold: The failure threshold the score was compared against
        passed: Whether score >= threshold
        findings: Findings sorted for presentation, identical files last
        messages: Plain-text rendering of each finding, in the same order as findings
        summary: Counter values keyed by their display label
        state: Raw counters the report was computed from
    """
    score: float
    threshold: float
    passed: bool
    findings: list[Finding] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)
    summary: dict[str, int] = field(default_factory=dict)
    state: RunState = field(default_factory=RunState)

    @classmethod
    def build(cls, state: RunState, findings: list[Finding], threshold: float) -> 'Report':
        score = duplication_score(state)
        ordered = sort_findings(findings)
        report = cls(
            score=score,
            threshold=threshold,
            passed=score >= threshold,
            findings=ordered,
            messages=[finding.to_plain_text() for finding in ordered],
            summary=summarize(state),
            state=state,
        )
        logger.info(f"Scored {state.total_lines} lines in {state.total_files} files: {score}% "
                    f"(threshold {threshold}%, {'pass' if report.passed else 'fail'})")
        return report

    def verdict(self) -> str:
        outcome = 'passed' if self.passed else 'failed'
        return f"You {outcome} your threshold of {self.threshold:g}% with a score of {self.score:.2f}%"
