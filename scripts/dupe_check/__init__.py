"""
Duplicate function checker for Swift sources.

Flags functions whose logic duplicates a function declared in an extension
file, and functions repeated inside one extension file. Functions are
compared by structural signature (operators, calls, control flow and
statement counts), so renamed variables and reformatting do not hide a copy.

Usage:
    python -m dupe_check FILE_OR_DIR... [-o STAMP] [--config FILE] [--verbose]
"""

import sys
from pathlib import Path
from typing import Iterable, List, Optional

from .config import DetectorConfig
from .models import FunctionRecord, Signature, SourceFile, WarningRecord
from .pipeline import detect_duplicates
from .report import emit_warnings, generate_markdown_report, print_summary, touch_stamp
from .scanner import scan_files


class DuplicateChecker:
    """Main facade for duplicate checking."""

    def __init__(self, paths: Iterable[str], config: Optional[DetectorConfig] = None,
                 verbose: bool = False):
        self.paths = list(paths)
        self.config = config or DetectorConfig()
        self.verbose = verbose
        self.templates: List[SourceFile] = []
        self.regulars: List[SourceFile] = []
        self.warnings: List[WarningRecord] = []

    def log(self, msg: str) -> None:
        """Print to stderr if verbose mode."""
        if self.verbose:
            print(f"   {msg}", file=sys.stderr)

    def run(self) -> List[WarningRecord]:
        """Scan, classify and compare. Returns the warnings in emission order."""
        self.templates, self.regulars = scan_files(self.paths, self.log)
        self.log(f"{len(self.templates)} extension files, {len(self.regulars)} other files")

        self.warnings = detect_duplicates(self.templates, self.regulars, self.config, self.log)
        return self.warnings

    def emit(self) -> None:
        emit_warnings(self.warnings)
        if self.verbose:
            print_summary(self.warnings)

    def get_report(self) -> str:
        """Generate markdown report."""
        return generate_markdown_report(self.templates, self.regulars, self.warnings)

    def write_stamp(self, path: Path) -> None:
        touch_stamp(path)
        self.log(f"Stamp written: {path}")


__all__ = [
    'DuplicateChecker',
    'DetectorConfig',
    'FunctionRecord',
    'Signature',
    'SourceFile',
    'WarningRecord',
]
