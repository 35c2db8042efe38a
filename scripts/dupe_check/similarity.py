"""
Weighted similarity between two signatures.

    score = w_op * operator overlap + w_call * call overlap
          + w_flow * control flow overlap + w_struct * structural match

Overlaps are |A & B| / |A | B|, and two empty sets count as a full match,
so functions without operators or calls are not penalized. The structural
match drops linearly with the summed count differences and reaches 0 at the
saturation value.
"""

from typing import AbstractSet

from .config import DetectorConfig
from .models import Signature

DEFAULT_CONFIG = DetectorConfig()


def set_overlap(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    union = a | b
    if not union:
        return 1.0
    return len(a & b) / len(union)


def structural_difference(a: Signature, b: Signature) -> int:
    return (
        abs(a.assignment_count - b.assignment_count)
        + abs(a.loop_count - b.loop_count)
        + abs(a.condition_count - b.condition_count)
        + abs(a.return_statement_count - b.return_statement_count)
    )


def structural_match(a: Signature, b: Signature, saturation: float) -> float:
    return max(0.0, 1.0 - structural_difference(a, b) / saturation)


def similarity(a: Signature, b: Signature, config: DetectorConfig = DEFAULT_CONFIG) -> float:
    """Similarity in [0, 1]; symmetric, and 1.0 for identical signatures."""
    score = (
        set_overlap(a.operators, b.operators) * config.operator_weight
        + set_overlap(a.function_calls, b.function_calls) * config.call_weight
        + set_overlap(a.control_flow_keywords, b.control_flow_keywords) * config.flow_weight
        + structural_match(a, b, config.structural_saturation) * config.structure_weight
    )
    return min(1.0, max(0.0, score))
