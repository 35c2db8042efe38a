"""
Duplicate detection pipeline.

Phase 1 catalogs every function of the extension (template) files into a
reference set. Phase 2 checks each function of the regular files against
that set. Phase 3 checks each extension file against itself, comparing a
function only with the ones declared before it.

A function is reported once, against the first match reaching the
threshold. Regular files are never compared with each other.
"""

from functools import partial
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .catalog import build_catalog
from .config import DetectorConfig
from .models import FunctionRecord, Signature, SourceFile, WarningRecord
from .similarity import similarity

Catalog = Callable[[str, str], List[FunctionRecord]]
Scorer = Callable[[Signature, Signature], float]


def catalog_file(source: SourceFile, catalog: Catalog = build_catalog) -> List[FunctionRecord]:
    """Functions of one file; empty if the file could not be read."""
    if not source.readable or not source.content:
        return []
    return catalog(source.content, source.path)


def first_match(
    record: FunctionRecord,
    candidates: Iterable[FunctionRecord],
    score: Scorer,
    threshold: float
) -> Optional[Tuple[FunctionRecord, float]]:
    """First candidate scoring at least `threshold` against `record`."""
    for candidate in candidates:
        value = score(record.signature, candidate.signature)
        if value >= threshold:
            return candidate, value
    return None


def make_warning(record: FunctionRecord, match: FunctionRecord, value: float, kind: str) -> WarningRecord:
    return WarningRecord(
        file=record.file,
        line=record.line,
        function_name=record.name,
        similarity=value,
        reference_file=match.file,
        reference_line=match.line,
        type=kind,
    )


def build_reference_set(catalogs: Iterable[List[FunctionRecord]]) -> List[FunctionRecord]:
    """Phase 1: extension functions keyed by (file, line, name), in insertion order."""
    references: Dict[Tuple[str, int, str], FunctionRecord] = {}
    for records in catalogs:
        for record in records:
            references[(record.file, record.line, record.name)] = record
    return list(references.values())


def detect_cross_bucket(
    regular_catalogs: Iterable[List[FunctionRecord]],
    references: Sequence[FunctionRecord],
    score: Scorer,
    threshold: float
) -> List[WarningRecord]:
    """Phase 2: regular functions that copy extension logic."""
    warnings = []
    for records in regular_catalogs:
        for record in records:
            found = first_match(record, references, score, threshold)
            if found:
                warnings.append(make_warning(record, *found, kind='cross_bucket'))
    return warnings


def detect_intra_bucket(
    template_catalogs: Iterable[List[FunctionRecord]],
    score: Scorer,
    threshold: float
) -> List[WarningRecord]:
    """Phase 3: functions repeating an earlier function of the same extension file."""
    warnings = []
    for records in template_catalogs:
        seen: List[FunctionRecord] = []
        for record in records:
            found = first_match(record, seen, score, threshold)
            if found:
                warnings.append(make_warning(record, *found, kind='intra_bucket'))
            seen.append(record)
    return warnings


def detect_duplicates(
    templates: Sequence[SourceFile],
    regulars: Sequence[SourceFile],
    config: DetectorConfig = DetectorConfig(),
    log: Callable[[str], None] = lambda x: None,
    catalog: Catalog = build_catalog,
    score: Optional[Scorer] = None
) -> List[WarningRecord]:
    """Run all phases. Cross-file warnings come first, then same-file ones."""
    if score is None:
        score = partial(similarity, config=config)

    template_catalogs = []
    for source in templates:
        records = catalog_file(source, catalog)
        log(f"Cataloged {len(records)} functions in {source.path}")
        template_catalogs.append(records)

    references = build_reference_set(template_catalogs)
    log(f"Reference set: {len(references)} extension functions")

    regular_catalogs = []
    for source in regulars:
        records = catalog_file(source, catalog)
        log(f"Cataloged {len(records)} functions in {source.path}")
        regular_catalogs.append(records)

    warnings = detect_cross_bucket(regular_catalogs, references, score, config.threshold)
    log(f"Cross-file duplicates: {len(warnings)}")

    same_file = detect_intra_bucket(template_catalogs, score, config.threshold)
    log(f"Same-file duplicates: {len(same_file)}")

    return warnings + same_file
