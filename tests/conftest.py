import sys
from pathlib import Path

import pytest

# This file lives at <project_root>/tests/conftest.py
PROJECT_ROOT = Path(__file__).resolve().parents[1]

proj = str(PROJECT_ROOT)
if proj not in sys.path:
    sys.path.insert(0, proj)

from recognizer.grammar import GrammarTable  # noqa: E402

EXAMPLE_RULES = [
    (0, (4, 1, 5)),
    (1, (2, 3)),
    (1, (3, 2)),
    (2, (4, 4)),
    (2, (5, 5)),
    (3, (4, 5)),
    (3, (5, 4)),
    (4, "a"),
    (5, "b"),
]

EXAMPLE_TEXT = """0: 4 1 5
1: 2 3 | 3 2
2: 4 4 | 5 5
3: 4 5 | 5 4
4: "a"
5: "b"
"""


@pytest.fixture
def example_grammar():
    return GrammarTable.from_rules(EXAMPLE_RULES)
