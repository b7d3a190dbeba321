from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable, List

import pytest

from elementscan.models import ElementDescriptor
from elementscan.polymer.element_finder import find_elements
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable source tree builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def find() -> Callable[[str], List[ElementDescriptor]]:
    """Run the element finder over a dedented JavaScript snippet."""

    def _find(source: str) -> List[ElementDescriptor]:
        return find_elements(textwrap.dedent(source).strip() + "\n", url="test.js")

    return _find
