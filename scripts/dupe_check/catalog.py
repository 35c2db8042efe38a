"""
Function catalog.
Finds function declarations in a Swift file and fingerprints each body.
"""

import re
from typing import Iterator, List, Optional

from tree_sitter import Node

from .config import DECLARATION_SEARCH_RADIUS, FUNCTION_KEYWORD
from .models import FunctionRecord
from .signature import extract_signature
from .syntax import node_text, parse_source

FUNCTION_DECLARATIONS = {'function_declaration', 'protocol_function_declaration'}

# Attributes and modifiers allowed before `func` on the same line
DECLARATION_LINE = re.compile(
    r'^(?:(?:@\w+(?:\([^)]*\))?'
    r'|public|private|fileprivate|internal|open|package'
    r'|static|class|final|override|mutating|nonmutating|nonisolated'
    r'|convenience|required|dynamic|optional|indirect|prefix|postfix|infix'
    r'|(?:private|fileprivate|internal|public)\(set\))\s+)*'
    + re.escape(FUNCTION_KEYWORD) + r'\s'
)


def iter_function_declarations(root: Node) -> Iterator[Node]:
    """Function declarations in source order, without descending into their bodies."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in FUNCTION_DECLARATIONS:
            yield node
            continue
        stack.extend(reversed(node.children))


def function_body(declaration: Node) -> Optional[Node]:
    body = declaration.child_by_field_name('body')
    if body is not None:
        return body
    for child in declaration.children:
        if child.type == 'function_body':
            return child
    return None


def line_at(source: bytes, offset: int) -> int:
    """1-based line of a byte offset."""
    return source.count(b'\n', 0, offset) + 1


def declaration_line(lines: List[str], rough_line: int,
                     radius: int = DECLARATION_SEARCH_RADIUS) -> int:
    """Line holding the `func` keyword near a parser position.

    The parser position of a declaration is where its attributes and
    modifiers start, which can be lines above `func`. Nearby lines are tried
    nearest first (later line on ties); the rough line is kept if none match.
    """
    candidates = [rough_line]
    for distance in range(1, radius + 1):
        candidates.extend([rough_line + distance, rough_line - distance])

    for line in candidates:
        if 1 <= line <= len(lines) and DECLARATION_LINE.match(lines[line - 1].strip()):
            return line
    return rough_line


def build_catalog(source: str, path: str) -> List[FunctionRecord]:
    """FunctionRecords for every function declared in a source file."""
    encoded = source.encode('utf-8')
    tree = parse_source(encoded)
    if tree is None or tree.root_node is None:
        return []

    lines = source.split('\n')
    records = []
    for declaration in iter_function_declarations(tree.root_node):
        name_node = declaration.child_by_field_name('name')
        if name_node is None:
            continue

        rough_line = line_at(encoded, declaration.start_byte)
        records.append(FunctionRecord(
            name=node_text(name_node, encoded),
            signature=extract_signature(function_body(declaration), encoded),
            line=declaration_line(lines, rough_line),
            file=path,
        ))

    return records
