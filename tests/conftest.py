"""Pytest fixtures shared across all test modules."""

import pytest
from unittest.mock import MagicMock

from notebook_cells import Cell, CellType, NotebookDocument, NotebookStore


@pytest.fixture
def document():
    """Notebook with cells A (code), B (markdown), C (code), in that order."""
    return NotebookDocument.from_cells([
        Cell(id="A", type=CellType.CODE, source="x = 1"),
        Cell(id="B", type=CellType.MARKDOWN, source="# Title"),
        Cell(id="C", type=CellType.CODE, source="y = x + 1"),
    ])


@pytest.fixture
def executor():
    return MagicMock()


@pytest.fixture
def store(document, executor):
    return NotebookStore(document, executor=executor)


@pytest.fixture
def dispatched():
    """A list that doubles as a dispatch callable recording commands."""
    class Recorder(list):
        def __call__(self, command):
            self.append(command)

    return Recorder()
