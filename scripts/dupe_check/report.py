"""
Report generation for the duplicate function checker.
Compiler-style warning lines, stamp file and markdown output.
"""

import sys
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional, Sequence, TextIO

from .models import SourceFile, WarningRecord

SECTION_TITLES = {
    'cross_bucket': 'Duplicates Of Extension Logic',
    'intra_bucket': 'Duplicates Within Extension Files',
}


def format_warning(w: WarningRecord) -> str:
    """One line in the format Xcode and most editors pick up."""
    return (
        f"{w.file}:{w.line}: warning: Duplicate function '{w.function_name}' detected "
        f"(similarity: {w.similarity * 100:.0f}%). "
        f"Similar logic exists in {w.reference_file}:{w.reference_line}"
    )


def emit_warnings(
    warnings: Sequence[WarningRecord],
    streams: Optional[Sequence[TextIO]] = None
) -> None:
    """Write every warning to stdout and stderr."""
    if streams is None:
        streams = (sys.stdout, sys.stderr)
    for w in warnings:
        line = format_warning(w) + '\n'
        for stream in streams:
            stream.write(line)
    for stream in streams:
        stream.flush()


def touch_stamp(path: Path) -> None:
    """Create or truncate the stamp file that marks a completed run."""
    Path(path).write_bytes(b'')


def generate_markdown_report(
    templates: Sequence[SourceFile],
    regulars: Sequence[SourceFile],
    warnings: Sequence[WarningRecord]
) -> str:
    """Generate markdown report."""
    lines = [
        "# Duplicate Function Report",
        "",
        f"**Extension files:** {len(templates)}",
        f"**Other files:** {len(regulars)}",
        f"**Warnings:** {len(warnings)}",
        "",
    ]

    if not warnings:
        lines.append("✅ **No duplicate functions found!**")
        return '\n'.join(lines)

    by_type: Dict[str, List[WarningRecord]] = defaultdict(list)
    for w in warnings:
        by_type[w.type].append(w)

    for wtype, type_warnings in by_type.items():
        lines.append(f"## {SECTION_TITLES.get(wtype, wtype.replace('_', ' ').title())}")
        lines.append("")
        lines.append("| Function | Location | Similarity | Similar To |")
        lines.append("|----------|----------|------------|------------|")
        for w in type_warnings:
            lines.append(
                f"| `{w.function_name}` | `{w.file}:{w.line}` | {w.percent}% "
                f"| `{w.reference_file}:{w.reference_line}` |"
            )
        lines.append("")

    return '\n'.join(lines)


def print_summary(warnings: Sequence[WarningRecord], stream: Optional[TextIO] = None) -> None:
    """Print a count summary."""
    stream = stream or sys.stderr
    if not warnings:
        print("✅ No duplicate functions found", file=stream)
        return

    cross = len([w for w in warnings if w.type == 'cross_bucket'])
    same = len([w for w in warnings if w.type == 'intra_bucket'])
    print(f"📊 Summary: {cross} copies of extension logic, {same} within extension files", file=stream)
