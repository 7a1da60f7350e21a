import io
import logging
import tempfile
import unittest
from pathlib import Path

from rich.console import Console

from duplint.cli import EXIT_ERROR, EXIT_THRESHOLD_FAILED, build_parser, configure_logging, duplint_main
from duplint.settings import ScanSettings

from .test_utils import join_blocks, paragraph


class CliTest(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self._tmpdir.name)
        (self.root / 'a.txt').write_text(join_blocks(paragraph('alpha'), paragraph('beta')))
        (self.root / 'b.txt').write_text(join_blocks(paragraph('gamma'), paragraph('alpha')))

    def tearDown(self):
        self._tmpdir.cleanup()

    def run_cli(self, *args) -> tuple[int, str]:
        console = Console(file=io.StringIO(), record=True, width=200, color_system=None)
        status = duplint_main(['--root', str(self.root), '--concurrency', '2', *args], console)
        return status, console.export_text()

    def test_parser(self):
        args = build_parser().parse_args(['a/*.md', '-f', 'b/*.md', '-t', '90', '-l', '3', '-c', '80',
                                          '--hash', 'sha256', '--no-exit-on-failure'])
        self.assertEqual(['a/*.md'], args.patterns)
        self.assertEqual(['b/*.md'], args.files)
        self.assertEqual(90.0, args.threshold)
        self.assertEqual(3, args.lines)
        self.assertEqual(80, args.chars)
        self.assertEqual('sha256', args.hash)
        self.assertTrue(args.no_exit_on_failure)

    def test_threshold_failure(self):
        status, output = self.run_cli('*.txt')
        self.assertEqual(EXIT_THRESHOLD_FAILED, status)
        self.assertIn('a.txt and b.txt repeat the following:', output)
        self.assertIn('You failed your threshold of 95% with a score of 80.00%', output)

    def test_threshold_passed(self):
        status, output = self.run_cli('--files', '*.txt', '--threshold', '80')
        self.assertEqual(0, status)
        self.assertIn('You passed your threshold of 80% with a score of 80.00%', output)

    def test_no_exit_on_failure(self):
        status, _ = self.run_cli('*.txt', '--no-exit-on-failure')
        self.assertEqual(0, status)

    def test_settings_file_in_root(self):
        (self.root / '.duplint.toml').write_text('files = ["*.txt"]\nthreshold = 50\n')
        status, output = self.run_cli()
        self.assertEqual(0, status)
        self.assertIn('threshold of 50%', output)

    def test_larger_block_size_finds_nothing(self):
        status, output = self.run_cli('*.txt', '--lines', '10')
        self.assertEqual(0, status)
        self.assertIn('score of 100.00%', output)

    def test_invalid_option(self):
        status, _ = self.run_cli('*.txt', '--threshold', '120')
        self.assertEqual(EXIT_ERROR, status)

    def test_nothing_to_analyze(self):
        status, _ = self.run_cli('*.md')
        self.assertEqual(EXIT_ERROR, status)

    def test_invalid_settings_file(self):
        (self.root / '.duplint.toml').write_text('threshold = = 1\n')
        status, _ = self.run_cli('*.txt')
        self.assertEqual(EXIT_ERROR, status)

    def test_missing_config_file(self):
        status, _ = self.run_cli('*.txt', '--config', str(self.root / 'missing.toml'))
        self.assertEqual(EXIT_ERROR, status)

    def test_invalid_utf8(self):
        (self.root / 'c.txt').write_bytes(b'\xff\xfe broken\n')
        status, _ = self.run_cli('*.txt')
        self.assertEqual(EXIT_ERROR, status)


class ConfigureLoggingTest(unittest.TestCase):
    def setUp(self):
        self._handlers = logging.root.handlers[:]
        self._level = logging.root.level

    def tearDown(self):
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
            handler.close()
        for handler in self._handlers:
            logging.root.addHandler(handler)
        logging.root.setLevel(self._level)

    def test_no_log_file(self):
        self.assertFalse(configure_logging(ScanSettings(), None, None))

    def test_log_file_from_settings(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / 'duplint.log'
            settings = ScanSettings({'logging': {'path': str(log_path), 'level': 'debug'}})

            self.assertTrue(configure_logging(settings, None, None))
            self.assertEqual(logging.DEBUG, logging.root.level)
            logging.getLogger('duplint.test').debug('hello')
            for handler in logging.root.handlers:
                handler.flush()

            self.assertIn('duplint.test - DEBUG - hello', log_path.read_text())

    def test_command_line_overrides_settings(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / 'cli.log'
            settings = ScanSettings({'logging': {'path': str(Path(tmpdir) / 'other.log'), 'level': 'DEBUG'}})

            self.assertTrue(configure_logging(settings, str(log_path), 'WARNING'))
            self.assertEqual(logging.WARNING, logging.root.level)


if __name__ == '__main__':
    unittest.main()
