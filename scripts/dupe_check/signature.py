"""
Signature extraction.
Reduces a function body to operators, calls, control flow and counts.
Identifiers used as locals or parameters never reach the signature.
"""

from typing import Optional, Set

from tree_sitter import Node

from .models import Signature
from .syntax import node_text, text_between, walk


# Node types holding `lhs <operator> rhs`
BINARY_EXPRESSIONS = {
    'additive_expression',
    'multiplicative_expression',
    'comparison_expression',
    'equality_expression',
    'conjunction_expression',
    'disjunction_expression',
    'nil_coalescing_expression',
    'range_expression',
    'bitwise_operation',
    'infix_expression',
}

LOOP_KEYWORDS = {
    'for_statement': 'for',
    'while_statement': 'while',
}

CONDITION_KEYWORDS = {
    'if_statement': 'if',
    'switch_statement': 'switch',
}


class SignatureExtractor:
    """Accumulates a Signature while walking one function body."""

    def __init__(self, source: bytes):
        self.source = source
        self.operators: Set[str] = set()
        self.function_calls: Set[str] = set()
        self.control_flow_keywords: Set[str] = set()
        self.assignment_count = 0
        self.loop_count = 0
        self.condition_count = 0
        self.return_statement_count = 0

        self._handlers = {
            'assignment': self.visit_assignment,
            'call_expression': self.visit_call,
            'control_transfer_statement': self.visit_control_transfer,
        }
        for node_type in BINARY_EXPRESSIONS:
            self._handlers[node_type] = self.visit_binary
        for node_type in LOOP_KEYWORDS:
            self._handlers[node_type] = self.visit_loop
        for node_type in CONDITION_KEYWORDS:
            self._handlers[node_type] = self.visit_condition

    def walk(self, body: Node) -> "SignatureExtractor":
        for node in walk(body):
            handler = self._handlers.get(node.type)
            if handler is not None:
                handler(node)
        return self

    def operator_text(self, node: Node) -> str:
        """Operator of `lhs <op> rhs`. Some operator tokens are hidden in the
        tree, so fall back to the text between the operands."""
        for field in ('op', 'operator'):
            op = node.child_by_field_name(field)
            if op is not None and op.end_byte > op.start_byte:
                return node_text(op, self.source).strip()
        if len(node.children) < 2:
            return ''
        return text_between(node.children[0], node.children[-1], self.source)

    def visit_binary(self, node: Node) -> None:
        op = self.operator_text(node)
        if op:
            self.operators.add(op)

    def visit_assignment(self, node: Node) -> None:
        op = self.operator_text(node)
        if op == '=':
            self.assignment_count += 1
        elif op:
            # `+=` and friends are operators, not assignments
            self.operators.add(op)

    def visit_call(self, node: Node) -> None:
        if not node.children or _is_subscript(node):
            return
        name = callee_name(node.children[0], self.source)
        if name:
            self.function_calls.add(name)

    def visit_loop(self, node: Node) -> None:
        self.loop_count += 1
        self.control_flow_keywords.add(LOOP_KEYWORDS[node.type])

    def visit_condition(self, node: Node) -> None:
        self.condition_count += 1
        self.control_flow_keywords.add(CONDITION_KEYWORDS[node.type])

    def visit_control_transfer(self, node: Node) -> None:
        if node.children and node.children[0].type == 'return':
            self.return_statement_count += 1
            self.control_flow_keywords.add('return')

    def signature(self) -> Signature:
        return Signature(
            operators=frozenset(self.operators),
            function_calls=frozenset(self.function_calls),
            control_flow_keywords=frozenset(self.control_flow_keywords),
            assignment_count=self.assignment_count,
            loop_count=self.loop_count,
            condition_count=self.condition_count,
            return_statement_count=self.return_statement_count,
        )


def callee_name(callee: Node, source: bytes) -> Optional[str]:
    """Called name: `foo()` -> foo, `x.y.foo()` -> foo, `.foo()` -> foo."""
    if callee.type == 'simple_identifier':
        return node_text(callee, source)

    if callee.type == 'navigation_expression':
        suffix = callee.child_by_field_name('suffix')
        if suffix is None:
            suffix = _last_child_of_type(callee, 'navigation_suffix')
        if suffix is None:
            return None
        member = suffix.child_by_field_name('suffix')
        if member is None:
            member = _last_child_of_type(suffix, 'simple_identifier')
        if member is not None and member.type == 'simple_identifier':
            return node_text(member, source)

    if callee.type == 'prefix_expression':
        # implicit member call: `.make(...)`
        target = callee.child_by_field_name('target')
        if target is None and callee.children:
            target = callee.children[-1]
        if target is None or target.type != 'simple_identifier':
            return None
        prefix = source[callee.start_byte:target.start_byte].decode('utf-8', errors='replace')
        if prefix.strip() == '.':
            return node_text(target, source)

    return None


def _is_subscript(call: Node) -> bool:
    """tree-sitter-swift parses `a[i]` as a call with bracketed arguments."""
    suffix = _last_child_of_type(call, 'call_suffix')
    if suffix is None:
        return False
    for child in suffix.children:
        if child.type == 'value_arguments':
            return bool(child.children) and child.children[0].type == '['
    return False


def _last_child_of_type(node: Node, node_type: str) -> Optional[Node]:
    for child in reversed(node.children):
        if child.type == node_type:
            return child
    return None


def extract_signature(body: Optional[Node], source: bytes) -> Signature:
    """Signature of a function body; a missing body gives the empty Signature."""
    if body is None:
        return Signature()
    return SignatureExtractor(source).walk(body).signature()
