"""Tests for scoring and report assembly."""
import unittest

from duplint.errors import ConfigurationError, EmptyCorpusError
from duplint.report.aggregator import RunState
from duplint.report.finding import IdenticalFiles, InterFileDuplicate, IntraFileDuplicate
from duplint.report.scorer import Report, duplication_score


class ScorerTest(unittest.TestCase):
    def test_score_formula(self):
        self.assertEqual(90.0, duplication_score(RunState(total_lines=100, duped_lines=10)))

    def test_score_rounds_to_two_decimals(self):
        self.assertEqual(66.67, duplication_score(RunState(total_lines=3, duped_lines=1)))

    def test_zero_lines_is_an_error(self):
        with self.assertRaises(EmptyCorpusError) as cm:
            duplication_score(RunState(total_files=2))
        self.assertIsInstance(cm.exception, ConfigurationError)
        self.assertEqual(2, cm.exception.total_files)

    def test_pass_is_inclusive(self):
        state = RunState(total_files=1, total_lines=100, duped_lines=10)
        self.assertTrue(Report.build(state, [], 90).passed)
        self.assertFalse(Report.build(state, [], 90.01).passed)

    def test_verdict(self):
        state = RunState(total_files=1, total_lines=100, duped_lines=10)
        self.assertEqual('You failed your threshold of 95% with a score of 90.00%',
                         Report.build(state, [], 95).verdict())
        self.assertEqual('You passed your threshold of 50% with a score of 90.00%',
                         Report.build(state, [], 50).verdict())

    def test_verdict_formats_threshold_the_same_for_int_and_float(self):
        state = RunState(total_files=1, total_lines=100, duped_lines=10)
        self.assertEqual(Report.build(state, [], 80).verdict(), Report.build(state, [], 80.0).verdict())
        self.assertIn('threshold of 80% ', Report.build(state, [], 80.0).verdict())
        self.assertIn('threshold of 92.5% ', Report.build(state, [], 92.5).verdict())

    def test_messages_follow_sorted_findings(self):
        identical = IdenticalFiles(['a', 'b'], 'f')
        inter = InterFileDuplicate(['c', 'd'], ['g'], ['shared'])
        intra = IntraFileDuplicate('e')
        intra.add_content('h', 'repeated')
        report = Report.build(RunState(total_files=5, total_lines=50), [identical, inter, intra], 95)

        self.assertEqual([intra, inter, identical], report.findings)
        self.assertEqual(3, len(report.messages))
        self.assertIn('repeats the following within the file:', report.messages[0])
        self.assertIn('repeat the following:', report.messages[1])
        self.assertIn('are IDENTICAL', report.messages[2])

    def test_summary(self):
        state = RunState(total_files=3, total_lines=40, duped_lines=8, file_duplicate_count=1,
                         block_duplicate_count=2, block_duplicate_in_same_file_count=1)
        self.assertEqual({
            'Files Analyzed': 3,
            'Lines Analyzed': 40,
            'Duplicate Files': 1,
            'Duplicate Lines': 8,
            'Duplicate Blocks': 2,
            'Duplicate Blocks Within Files': 1,
        }, Report.build(state, [], 95).summary)


if __name__ == '__main__':
    unittest.main()
