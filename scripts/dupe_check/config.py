"""
Configuration constants for the duplicate function checker.
Similarity weights, thresholds and Swift source patterns.
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

# Files to analyze
SOURCE_EXTENSION = '.swift'

# Files containing this marker are treated as extension/template sources
EXTENSION_MARKER = 'extension '

# Keyword introducing a function declaration
FUNCTION_KEYWORD = 'func'

# Lines searched around the parser position for the `func` keyword
DECLARATION_SEARCH_RADIUS = 2

# Directories skipped when a directory is given on the command line
IGNORE_PATTERNS = [
    '.build',
    '.swiftpm',
    '.git',
    'DerivedData',
    'Pods',
    'Carthage',
]

# Minimum similarity to report a duplicate (70% = likely copy)
SIMILARITY_THRESHOLD = 0.70

# Similarity weights (sum to 1.0)
OPERATOR_WEIGHT = 0.30
CALL_WEIGHT = 0.25
FLOW_WEIGHT = 0.20
STRUCTURE_WEIGHT = 0.25

# Combined structural count difference treated as fully dissimilar
STRUCTURAL_SATURATION = 10.0

# YAML `weights:` keys -> DetectorConfig fields
WEIGHT_KEYS = {
    'operators': 'operator_weight',
    'calls': 'call_weight',
    'control_flow': 'flow_weight',
    'structure': 'structure_weight',
}


class ConfigError(ValueError):
    """Invalid detector configuration."""


@dataclass(frozen=True)
class DetectorConfig:
    """Tunable scoring and reporting values."""
    threshold: float = SIMILARITY_THRESHOLD
    operator_weight: float = OPERATOR_WEIGHT
    call_weight: float = CALL_WEIGHT
    flow_weight: float = FLOW_WEIGHT
    structure_weight: float = STRUCTURE_WEIGHT
    structural_saturation: float = STRUCTURAL_SATURATION

    def validate(self) -> "DetectorConfig":
        """Raise ConfigError if values would push scores outside [0, 1]."""
        if not 0.0 <= self.threshold <= 1.0:
            raise ConfigError(f"threshold must be between 0 and 1, got {self.threshold}")

        weights = {
            'operators': self.operator_weight,
            'calls': self.call_weight,
            'control_flow': self.flow_weight,
            'structure': self.structure_weight,
        }
        negative = [name for name, value in weights.items() if value < 0]
        if negative:
            raise ConfigError(f"weights must not be negative: {', '.join(negative)}")
        total = sum(weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ConfigError(f"weights must sum to 1.0, got {total:g}")

        if self.structural_saturation <= 0:
            raise ConfigError(
                f"structural_saturation must be positive, got {self.structural_saturation}"
            )
        return self

    def with_threshold(self, threshold: Optional[float]) -> "DetectorConfig":
        """Copy with a threshold override (None keeps the current one)."""
        if threshold is None:
            return self
        return DetectorConfig(
            threshold=threshold,
            operator_weight=self.operator_weight,
            call_weight=self.call_weight,
            flow_weight=self.flow_weight,
            structure_weight=self.structure_weight,
            structural_saturation=self.structural_saturation,
        ).validate()


def _as_number(key: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"'{key}' must be a number, got {value!r}")
    return float(value)


def load_config(path: Path) -> DetectorConfig:
    """Load a DetectorConfig from a YAML file.

    Missing keys keep their defaults:

        threshold: 0.7
        structural_saturation: 10
        weights:
          operators: 0.30
          calls: 0.25
          control_flow: 0.20
          structure: 0.25
    """
    try:
        with open(path, encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping")

    unknown = set(data) - {'threshold', 'structural_saturation', 'weights'}
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")

    values = {}
    if 'threshold' in data:
        values['threshold'] = _as_number('threshold', data['threshold'])
    if 'structural_saturation' in data:
        values['structural_saturation'] = _as_number(
            'structural_saturation', data['structural_saturation']
        )

    weights = data.get('weights') or {}
    if not isinstance(weights, dict):
        raise ConfigError("'weights' must be a mapping")
    unknown = set(weights) - set(WEIGHT_KEYS)
    if unknown:
        raise ConfigError(f"unknown weights: {', '.join(sorted(unknown))}")
    for key, value in weights.items():
        values[WEIGHT_KEYS[key]] = _as_number(f"weights.{key}", value)

    return DetectorConfig(**values).validate()
