"""
File scanner for the duplicate function checker.
Handles path expansion, safe reading and bucket classification.
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from .config import EXTENSION_MARKER, IGNORE_PATTERNS, SOURCE_EXTENSION
from .models import SourceFile


def should_ignore(path: Path) -> bool:
    """Check if path lies in an ignored directory."""
    return any(part in IGNORE_PATTERNS for part in path.parts)


def read_content(path: Path) -> Optional[str]:
    """Read file content safely. None if unreadable."""
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError):
        return None


def is_template_source(content: str) -> bool:
    """Extension files are where shared logic is supposed to live."""
    return EXTENSION_MARKER in content


def expand_paths(paths: Iterable[str], log: Callable[[str], None] = lambda x: None) -> List[str]:
    """Swift file paths from the arguments, in order. Directories are searched recursively."""
    expanded = []

    for arg in paths:
        path = Path(arg)
        if path.is_dir():
            found = sorted(
                str(p) for p in path.rglob(f'*{SOURCE_EXTENSION}')
                if p.is_file() and not should_ignore(p.relative_to(path))
            )
            log(f"Found {len(found)} files in {arg}")
            expanded.extend(found)
        elif arg.endswith(SOURCE_EXTENSION):
            expanded.append(arg)
        else:
            log(f"Ignored: {arg}")

    return expanded


def load_source(path: str) -> SourceFile:
    """Read and classify one file. Unreadable files are regular and empty."""
    content = read_content(Path(path))
    if content is None:
        return SourceFile(path=path, content='', is_template=False, readable=False)
    return SourceFile(path=path, content=content, is_template=is_template_source(content))


def scan_files(
    paths: Iterable[str],
    log: Callable[[str], None] = lambda x: None
) -> Tuple[List[SourceFile], List[SourceFile]]:
    """Split input files into (template, regular) buckets, keeping input order."""
    templates = []
    regulars = []

    for path in expand_paths(paths, log):
        source = load_source(path)
        if not source.readable:
            log(f"Unreadable: {path}")
        if source.is_template:
            templates.append(source)
            log(f"Scanned: {path} (extension)")
        else:
            regulars.append(source)
            log(f"Scanned: {path}")

    return templates, regulars
