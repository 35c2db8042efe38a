"""
Data models for the duplicate function checker.
Pure dataclasses - no business logic.
"""

from dataclasses import dataclass
from typing import FrozenSet


@dataclass(frozen=True)
class Signature:
    """Structural fingerprint of one function body."""
    operators: FrozenSet[str] = frozenset()
    function_calls: FrozenSet[str] = frozenset()
    control_flow_keywords: FrozenSet[str] = frozenset()
    assignment_count: int = 0
    loop_count: int = 0
    condition_count: int = 0
    return_statement_count: int = 0


@dataclass(frozen=True)
class FunctionRecord:
    """A function declaration found while cataloging a file."""
    name: str
    signature: Signature
    line: int
    file: str


@dataclass(frozen=True)
class WarningRecord:
    """A suspected duplicate function."""
    file: str
    line: int
    function_name: str
    similarity: float
    reference_file: str
    reference_line: int
    type: str = 'cross_bucket'  # cross_bucket, intra_bucket

    @property
    def percent(self) -> int:
        return round(self.similarity * 100)


@dataclass(frozen=True)
class SourceFile:
    """A Swift source file and its bucket."""
    path: str
    content: str
    is_template: bool
    readable: bool = True
