"""
Swift syntax trees via tree-sitter.
"""

from typing import Iterator, Optional

from tree_sitter import Node, Tree
from tree_sitter_language_pack import get_parser

LANGUAGE = 'swift'

# Parser singleton
_parser = None


def get_swift_parser():
    """Get or create the tree-sitter Swift parser."""
    global _parser
    if _parser is None:
        _parser = get_parser(LANGUAGE)
    return _parser


def parse_source(source: bytes) -> Optional[Tree]:
    """Parse UTF-8 Swift source. tree-sitter recovers from syntax errors."""
    return get_swift_parser().parse(source)


def node_text(node: Node, source: bytes) -> str:
    """Source text covered by a node."""
    return source[node.start_byte:node.end_byte].decode('utf-8', errors='replace')


def text_between(first: Node, last: Node, source: bytes) -> str:
    """Stripped source text between two sibling nodes."""
    return source[first.end_byte:last.start_byte].decode('utf-8', errors='replace').strip()


def walk(node: Node) -> Iterator[Node]:
    """Yield every node of the subtree once, in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
