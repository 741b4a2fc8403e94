"""
Pytest configuration and shared fixtures for MikroValid tests.
"""

import sys
from pathlib import Path
from typing import List

import pytest

# Ensure src and tests directories are in path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from mikrovalid import MikroValid


class CollectingSink:
    """Diagnostic sink that records every message it receives."""

    def __init__(self):
        self.messages: List[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def validator():
    """Silent validator, the default for behaviour tests."""
    return MikroValid(silent=True)


@pytest.fixture
def sink():
    return CollectingSink()


@pytest.fixture
def demo_schema():
    return {
        "properties": {
            "personal": {
                "type": "object",
                "name": {"type": "string"},
                "required": ["name"],
            },
            "work": {
                "type": "object",
                "office": {"type": "string"},
                "currency": {"type": "string"},
                "salary": {"type": "number"},
                "required": ["office"],
            },
            "required": ["personal", "work"],
        }
    }


@pytest.fixture
def demo_input():
    return {
        "personal": {"name": "Sam Person"},
        "work": {"office": "London", "currency": "GBP", "salary": 10000},
    }
