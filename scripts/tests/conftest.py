"""
Shared fixtures and Swift samples for dupe_check tests.
"""

import sys
from pathlib import Path

import pytest

# Make the package importable when running from the repo root
_scripts_dir = Path(__file__).resolve().parents[1]
if str(_scripts_dir) not in sys.path:
    sys.path.insert(0, str(_scripts_dir))

from dupe_check.catalog import build_catalog
from dupe_check.models import FunctionRecord, Signature, SourceFile

SCRIPTS_DIR = _scripts_dir

# ============================================
# Swift samples
# ============================================

# sumOfDigits is declared on line 4
SUM_OF_DIGITS_EXTENSION = """\
import Foundation

extension Int {
    func sumOfDigits(n: Int) -> Int {
        var sum = 0
        while n > 0 {
            sum += n % 10
            n /= 10
        }
        return sum
    }
}
"""

# Same logic, renamed: digitSum is declared on line 3
DIGIT_SUM_RENAMED = """\
import Foundation

func digitSum(x: Int) -> Int {
    var total = 0
    while x > 0 {
        total += x % 10
        x /= 10
    }
    return total
}
"""

# `x = x / 10` instead of `x /= 10`: one operator differs, one extra assignment
DIGIT_SUM_VARIANT = """\
func digitTotal(x: Int) -> Int {
    var total = 0
    while x > 0 {
        total += x % 10
        x = x / 10
    }
    return total
}
"""

# Two functions sharing calls and flow but not operators, two assignments apart
PARTIAL_OVERLAP_EXTENSION = """\
extension Calculator {
    func combine(a: Int, b: Int) -> Int {
        return compute(a + b)
    }

    func difference(a: Int, b: Int) -> Int {
        var c = a
        c = compute(c - b)
        c = c
        return c
    }
}
"""

UNRELATED_REGULAR = """\
struct Greeter {
    func greet(name: String) -> String {
        if name.isEmpty {
            return "Hello"
        }
        print(name)
        return "Hello, " + name
    }
}
"""


# ============================================
# Helpers
# ============================================

def catalog_one(source: str, path: str = 'Sample.swift') -> FunctionRecord:
    """The single function cataloged from `source`."""
    records = build_catalog(source, path)
    assert len(records) == 1, f"expected one function, got {[r.name for r in records]}"
    return records[0]


def signature(**kwargs) -> Signature:
    """Signature with list/set arguments converted to frozensets."""
    for key in ('operators', 'function_calls', 'control_flow_keywords'):
        if key in kwargs:
            kwargs[key] = frozenset(kwargs[key])
    return Signature(**kwargs)


def record(name: str, file: str, line: int, sig: Signature = None) -> FunctionRecord:
    return FunctionRecord(name=name, signature=sig or Signature(), line=line, file=file)


def source_file(path: str, is_template: bool, content: str = 'func f() {}') -> SourceFile:
    return SourceFile(path=path, content=content, is_template=is_template)


@pytest.fixture
def write_swift(tmp_path):
    """Factory writing a Swift file under tmp_path and returning its path string."""
    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write
