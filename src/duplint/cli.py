import argparse
import logging
import sys
import textwrap
import tomllib
from pathlib import Path

from rich.console import Console

from .commands.present import present
from .config import configure
from .errors import DuplintError
from .index.fingerprint import HASH_ALGORITHMS
from .scanner import Scanner
from .settings import ScanSettings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

EXIT_THRESHOLD_FAILED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='duplint',
        description='Find files and blocks of text duplicated across a set of documents and fail when the '
                    'duplication score drops below a threshold.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              duplint
              duplint 'src/**/*.py'
              duplint --files 'docs/**/*.md' --threshold 90 --lines 3 --chars 80

            Options given on the command line take precedence over .duplint.toml in the
            scan root, which takes precedence over the built-in defaults.
            ''').strip()
    )
    parser.add_argument(
        'patterns',
        nargs='*',
        metavar='PATTERN',
        help='Glob patterns of files to analyze (default: **/*.*)')
    parser.add_argument(
        '-f', '--files',
        metavar='GLOB',
        action='append',
        help='Glob pattern of files to analyze; may be repeated')
    parser.add_argument(
        '-t', '--threshold',
        type=float,
        metavar='N',
        help='Minimum duplication score (0-100) required to pass (default: 95)')
    parser.add_argument(
        '-l', '--lines',
        type=int,
        metavar='N',
        help='Minimum number of lines a block must have to be compared (default: 4)')
    parser.add_argument(
        '-c', '--chars',
        type=int,
        metavar='N',
        help='Blocks must have more than this many characters to be compared (default: 100)')
    parser.add_argument(
        '--hash',
        choices=sorted(HASH_ALGORITHMS),
        help='Fingerprint algorithm (default: md5)')
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='Settings file to use instead of .duplint.toml in the scan root')
    parser.add_argument(
        '--root',
        metavar='DIR',
        help='Directory relative patterns are expanded against (default: current directory)')
    parser.add_argument(
        '--concurrency',
        type=int,
        metavar='N',
        help='Number of workers reading files (default: number of CPUs)')
    parser.add_argument(
        '--no-exit-on-failure',
        action='store_true',
        help='Exit with status 0 even when the score is below the threshold')
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Path to log file. If not provided, uses logging.path from the settings file or no logging.')
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to INFO when logging is enabled.')
    return parser


def configure_logging(settings: ScanSettings, log_file: str | None, log_level: str | None) -> bool:
    """Send log records to the CLI-given log file, or else to logging.path from the settings file.

    Returns:
        True if logging was configured, False otherwise
    """
    if not log_file:
        log_file = settings.get('logging.path')
    if not log_file:
        return False

    level = log_level or settings.get('logging.level') or 'INFO'
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(filename=str(log_file), level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)
    return True


def duplint_main(argv: list[str] | None = None, console: Console | None = None) -> int:
    """Run the command line tool and return its exit status."""
    args = build_parser().parse_args(argv)
    err = Console(stderr=True)

    root = Path(args.root) if args.root else Path.cwd()

    try:
        if args.config:
            settings = ScanSettings.load(Path(args.config))
        else:
            settings = ScanSettings.discover(root)
    except (OSError, tomllib.TOMLDecodeError) as e:
        err.print(f"Error: cannot load settings: {e}", style="bold red", markup=False, highlight=False)
        return EXIT_ERROR

    configure_logging(settings, args.log_file, args.log_level)

    files = list(args.patterns) + list(args.files or [])
    overrides = {
        'files': files or None,
        'threshold': args.threshold,
        'min_lines': args.lines,
        'min_chars': args.chars,
        'hash_algorithm': args.hash,
        'concurrency': args.concurrency,
        'exit_on_failure': False if args.no_exit_on_failure else None,
    }

    try:
        config = configure(overrides, settings=settings)
        report = Scanner(config, root).scan()
    except (DuplintError, UnicodeDecodeError) as e:
        err.print(f"Error: {e}", style='bold red', markup=False, highlight=False)
        return EXIT_ERROR

    present(report, console)

    if not report.passed and config.exit_on_failure:
        return EXIT_THRESHOLD_FAILED
    return 0


def main():
    sys.exit(duplint_main())


if __name__ == '__main__':
    main()
