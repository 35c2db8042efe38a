"""
Command line tests.
"""

import subprocess
import sys

from dupe_check.__main__ import main

from .conftest import (
    DIGIT_SUM_RENAMED,
    PARTIAL_OVERLAP_EXTENSION,
    SCRIPTS_DIR,
    SUM_OF_DIGITS_EXTENSION,
)


def expected_line(path, line, name, percent, ref_path, ref_line):
    return (
        f"{path}:{line}: warning: Duplicate function '{name}' detected "
        f"(similarity: {percent}%). Similar logic exists in {ref_path}:{ref_line}"
    )


class TestMain:

    def test_no_arguments(self, capsys):
        assert main([]) == 0
        captured = capsys.readouterr()
        assert captured.out == ''
        assert captured.err == ''

    def test_paths_after_stamp_option(self, tmp_path, write_swift, capsys):
        """`-o STAMP` may appear anywhere among the input paths."""
        ext = write_swift('Int+Digits.swift', SUM_OF_DIGITS_EXTENSION)
        regular = write_swift('Stats.swift', DIGIT_SUM_RENAMED)
        stamp = tmp_path / 'dupes.stamp'

        assert main([ext, '-o', str(stamp), regular]) == 0

        assert capsys.readouterr().out == expected_line(regular, 3, 'digitSum', 100, ext, 4) + '\n'
        assert stamp.exists()

    def test_stamp_without_inputs(self, tmp_path, capsys):
        stamp = tmp_path / 'dupes.stamp'
        assert main(['-o', str(stamp)]) == 0
        assert stamp.exists()
        assert capsys.readouterr().out == ''

    def test_duplicate_reported_on_both_streams(self, tmp_path, write_swift, capsys):
        ext = write_swift('Int+Digits.swift', SUM_OF_DIGITS_EXTENSION)
        regular = write_swift('Stats.swift', DIGIT_SUM_RENAMED)
        stamp = tmp_path / 'dupes.stamp'

        assert main([regular, ext, '-o', str(stamp)]) == 0

        captured = capsys.readouterr()
        line = expected_line(regular, 3, 'digitSum', 100, ext, 4)
        assert captured.out == line + '\n'
        assert captured.err == line + '\n'
        assert stamp.exists()

    def test_no_duplicates(self, write_swift, capsys):
        ext = write_swift('Calc.swift', PARTIAL_OVERLAP_EXTENSION)
        assert main([ext]) == 0
        assert capsys.readouterr().out == ''

    def test_threshold_flag(self, write_swift, capsys):
        ext = write_swift('Calc.swift', PARTIAL_OVERLAP_EXTENSION)
        assert main([ext, '--threshold', '0.6']) == 0
        out = capsys.readouterr().out
        assert out == expected_line(ext, 6, 'difference', 65, ext, 2) + '\n'

    def test_directory_and_report(self, tmp_path, write_swift, capsys):
        write_swift('Sources/Int+Digits.swift', SUM_OF_DIGITS_EXTENSION)
        write_swift('Sources/Stats.swift', DIGIT_SUM_RENAMED)
        report = tmp_path / 'dupes.md'

        assert main([str(tmp_path / 'Sources'), '--report', str(report)]) == 0
        assert "Stats.swift:3: warning" in capsys.readouterr().out
        assert "`digitSum`" in report.read_text(encoding='utf-8')

    def test_bad_config(self, tmp_path, write_swift, capsys):
        config = tmp_path / 'dupes.yaml'
        config.write_text("threshold: 3\n")
        ext = write_swift('Calc.swift', PARTIAL_OVERLAP_EXTENSION)
        assert main([ext, '--config', str(config)]) == 1
        assert "❌" in capsys.readouterr().err

    def test_config_file(self, tmp_path, write_swift, capsys):
        config = tmp_path / 'dupes.yaml'
        config.write_text("threshold: 0.6\n")
        ext = write_swift('Calc.swift', PARTIAL_OVERLAP_EXTENSION)
        assert main([ext, '--config', str(config)]) == 0
        assert "'difference'" in capsys.readouterr().out

    def test_verbose_logs_to_stderr(self, write_swift, capsys):
        regular = write_swift('Stats.swift', DIGIT_SUM_RENAMED)
        assert main([regular, '-v']) == 0
        captured = capsys.readouterr()
        assert captured.out == ''
        assert "Scanned:" in captured.err


class TestModule:

    def test_python_dash_m(self, tmp_path, write_swift):
        """Run the module the way a build step would."""
        ext = write_swift('Int+Digits.swift', SUM_OF_DIGITS_EXTENSION)
        regular = write_swift('Stats.swift', DIGIT_SUM_RENAMED)
        stamp = tmp_path / 'dupes.stamp'

        result = subprocess.run(
            [sys.executable, '-m', 'dupe_check', ext, regular, '-o', str(stamp)],
            capture_output=True,
            text=True,
            cwd=SCRIPTS_DIR
        )

        assert result.returncode == 0
        line = expected_line(regular, 3, 'digitSum', 100, ext, 4)
        assert result.stdout.splitlines() == [line]
        assert line in result.stderr
        assert stamp.exists()
