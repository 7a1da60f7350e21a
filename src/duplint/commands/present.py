"""Presenter: renders a Report to the terminal with rich."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..report.finding import Finding, FindingKind
from ..report.scorer import Report

_PHRASE_STYLES = {
    FindingKind.IDENTICAL_FILE: 'bold red',
    FindingKind.INTER_FILE_DUPLICATE: 'default',
    FindingKind.INTRA_FILE_DUPLICATE: 'default',
}


def render_finding(finding: Finding) -> Text:
    """Title with highlighted paths, followed by the numbered payloads."""
    text = Text()
    paths = finding.participant_files
    for i, path in enumerate(paths):
        if i > 0:
            text.append(' and ' if i == len(paths) - 1 else ', ')
        text.append(path, style='yellow')
    text.append(' ')
    text.append(finding.phrase, style=_PHRASE_STYLES[finding.kind])
    for number, payload in enumerate(finding.payloads(), 1):
        text.append(f"\n{number}.)\n\t")
        text.append(payload, style='red')
    text.append('\n')
    return text


def render_summary(report: Report) -> Table:
    table = Table(show_header=True, header_style='bold')
    for label in report.summary:
        table.add_column(label, justify='right')
    table.add_row(*(str(value) for value in report.summary.values()))
    return table


def present(report: Report, console: Console | None = None) -> None:
    """Print findings, the summary table and the verdict."""
    if console is None:
        console = Console()

    for finding in report.findings:
        console.print(render_finding(finding))
    console.print(render_summary(report))

    style = 'bold white on green' if report.passed else 'bold white on red'
    console.print(f"[{style}]{escape(report.verdict())}[/{style}]")
