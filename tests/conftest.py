"""Shared fixtures for the estreewalk test suite."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def make_test_statement(block_body=None):
    """Build a node of a type no key table knows about.

    Structure:
    TestStatement
    ├── id: Identifier(decl)
    ├── params: [Identifier(a)]
    ├── defaults: [Literal(20)]
    ├── rest: Identifier(rest)
    └── body: BlockStatement(block_body)
    """
    return {
        "type": "TestStatement",
        "id": {"type": "Identifier", "name": "decl"},
        "params": [{"type": "Identifier", "name": "a"}],
        "defaults": [{"type": "Literal", "value": 20}],
        "rest": {"type": "Identifier", "name": "rest"},
        "body": {"type": "BlockStatement", "body": list(block_body or [])},
    }


@pytest.fixture
def test_statement():
    """A TestStatement tree (unregistered node type)."""
    return make_test_statement()


@pytest.fixture
def program():
    """A small, fully registered ESTree program.

    Source: ``var x = a + 1; f(x);``
    """
    return {
        "type": "Program",
        "body": [
            {
                "type": "VariableDeclaration",
                "kind": "var",
                "declarations": [{
                    "type": "VariableDeclarator",
                    "id": {"type": "Identifier", "name": "x"},
                    "init": {
                        "type": "BinaryExpression",
                        "operator": "+",
                        "left": {"type": "Identifier", "name": "a"},
                        "right": {"type": "Literal", "value": 1},
                    },
                }],
            },
            {
                "type": "ExpressionStatement",
                "expression": {
                    "type": "CallExpression",
                    "callee": {"type": "Identifier", "name": "f"},
                    "arguments": [{"type": "Identifier", "name": "x"}],
                },
            },
        ],
    }
