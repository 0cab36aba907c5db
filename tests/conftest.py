import os
import random
import sys

import pytest

# Make the top-level packages importable without installing the project.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


def parse_board(text: str) -> list[str]:
    """'.' empty, 'x' human, 'o' computer; whitespace ignored."""
    return ["" if ch == "." else ch for ch in text if not ch.isspace()]


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
