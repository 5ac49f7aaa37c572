"""
Notebook: typed cell records and the ordered notebook document.
"""

import logging
import uuid
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from notebook_cells.errors import CellNotFoundError

logger = logging.getLogger(__name__)

METADATA_SCHEMA_VERSION = 1

# (field name, raw key) for every boolean display flag
_FLAG_KEYS = [
    ("input_hidden", "inputHidden"),
    ("hide_input", "hide_input"),
    ("output_hidden", "outputHidden"),
    ("output_expanded", "outputExpanded"),
]


def _new_cell_id() -> str:
    return f"cell_{uuid.uuid4().hex[:12]}"


class CellType(str, Enum):
    """Type of notebook cell."""
    CODE = "code"
    MARKDOWN = "markdown"
    RAW = "raw"


class CellStatus(str, Enum):
    """Transient execution status of a cell."""
    IDLE = "idle"
    QUEUED = "queued"
    BUSY = "busy"
    ERROR = "error"


class CellMetadata(BaseModel):
    """
    Typed view over a cell's metadata mapping.

    Known display flags and tags get explicit fields; every other key is kept
    as extra data so nothing is lost on the way back to the raw form.

    Schema policy:
    - a missing flag is False, missing tags are empty
    - a flag whose raw value is not a real boolean is treated as absent
    - tags accept any iterable of strings; a bare string is one tag
    - metadata without a schema_version is version 1; newer versions are
      read as-is and reported
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    schema_version: int = METADATA_SCHEMA_VERSION
    input_hidden: bool = Field(default=False, alias="inputHidden")
    hide_input: bool = False
    output_hidden: bool = Field(default=False, alias="outputHidden")
    output_expanded: bool = Field(default=False, alias="outputExpanded")
    tags: frozenset[str] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _apply_schema_policy(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        data = dict(data)

        version = data.get("schema_version", METADATA_SCHEMA_VERSION)
        if not isinstance(version, int) or isinstance(version, bool):
            logger.warning("Ignoring malformed metadata schema_version %r", version)
            version = METADATA_SCHEMA_VERSION
        elif version > METADATA_SCHEMA_VERSION:
            logger.warning(
                "Cell metadata schema %d is newer than supported %d; reading known fields only",
                version, METADATA_SCHEMA_VERSION,
            )
        data["schema_version"] = version

        for name, raw_key in _FLAG_KEYS:
            for key in {name, raw_key}:
                if key in data and not isinstance(data[key], bool):
                    logger.warning("Treating non-boolean metadata %s=%r as unset", key, data[key])
                    del data[key]

        if "tags" in data:
            data["tags"] = _normalize_tags(data["tags"])
        return data

    @classmethod
    def from_raw(cls, raw: Optional[Mapping[str, Any]]) -> "CellMetadata":
        """Create from a raw metadata mapping (None means empty)."""
        return cls.model_validate(dict(raw or {}))

    def to_raw(self) -> dict[str, Any]:
        """Convert back to the raw key/value form, omitting defaults."""
        raw = self.model_dump(by_alias=True, exclude_defaults=True)
        if "tags" in raw:
            raw["tags"] = sorted(raw["tags"])
        return raw


def _normalize_tags(value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset([value])
    if not isinstance(value, Iterable):
        logger.warning("Ignoring non-iterable metadata tags %r", value)
        return frozenset()
    return frozenset(tag for tag in value if isinstance(tag, str))


class OutputRecord(BaseModel):
    """
    A single output of a code cell. Its index is its position in the cell.

    Fields other than data and metadata (stream name/text, error
    ename/evalue/traceback, ...) are kept as extra data.
    """
    model_config = ConfigDict(extra="allow")

    output_type: str = "display_data"
    data: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)


class Cell(BaseModel):
    """A single notebook cell."""
    id: str = Field(default_factory=_new_cell_id)
    type: CellType = CellType.CODE
    source: str = ""
    metadata: CellMetadata = Field(default_factory=CellMetadata)
    outputs: list[OutputRecord] = Field(default_factory=list)
    execution_count: Optional[int] = None
    status: CellStatus = CellStatus.IDLE

    @property
    def tags(self) -> frozenset[str]:
        return self.metadata.tags

    @classmethod
    def from_dict(cls, data: dict) -> "Cell":
        """Create from a raw cell dictionary ("cell_type", "source", ...)."""
        source = data.get("source", "")
        if isinstance(source, list):
            source = "".join(source)
        return cls(
            id=data.get("id") or _new_cell_id(),
            type=CellType(data.get("cell_type", data.get("type", "code"))),
            source=source,
            metadata=CellMetadata.from_raw(data.get("metadata")),
            outputs=[OutputRecord(**o) for o in data.get("outputs", [])],
            execution_count=data.get("execution_count"),
        )


class NotebookDocument(BaseModel):
    """
    The notebook as an explicit value: cell order plus a cell map.

    The order holds each id exactly once and every id in it has a cell in
    the map (and nothing else does).

    model_type is "notebook" for real notebooks; "dummy" and "unknown" are
    placeholders used while content is loading.
    """
    model_config = ConfigDict(protected_namespaces=())

    model_type: str = "notebook"
    cell_order: list[str] = Field(default_factory=list)
    cells: dict[str, Cell] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_order(self) -> "NotebookDocument":
        if len(set(self.cell_order)) != len(self.cell_order):
            raise ValueError("cell_order contains duplicate ids")
        if set(self.cell_order) != set(self.cells):
            raise ValueError("cell_order and cells must reference the same ids")
        for key, cell in self.cells.items():
            if key != cell.id:
                raise ValueError(f"cell map key {key!r} does not match cell id {cell.id!r}")
        return self

    @classmethod
    def new(cls, name: str = "Untitled") -> "NotebookDocument":
        """Create a new empty notebook."""
        return cls(metadata={"name": name})

    @classmethod
    def from_cells(cls, cells: Iterable[Cell], **kwargs) -> "NotebookDocument":
        """Create a notebook whose order follows the given cells."""
        cells = list(cells)
        return cls(
            cell_order=[c.id for c in cells],
            cells={c.id: c for c in cells},
            **kwargs,
        )

    @property
    def is_notebook(self) -> bool:
        return self.model_type == "notebook"

    def __contains__(self, cell_id: object) -> bool:
        return cell_id in self.cells

    def __len__(self) -> int:
        return len(self.cell_order)

    def add_cell(self, cell: Optional[Cell] = None, **kwargs) -> Cell:
        """
        Append a cell to the notebook.

        Args:
            cell: Cell to add, or create new one
            **kwargs: Arguments for new cell if cell not provided

        Returns:
            The added cell
        """
        return self.insert_cell(len(self.cell_order), cell, **kwargs)

    def insert_cell(self, index: int, cell: Optional[Cell] = None, **kwargs) -> Cell:
        """Insert a cell at a specific position in the order."""
        if cell is None:
            cell = Cell(**kwargs)
        if cell.id in self.cells:
            raise ValueError(f"Cell {cell.id!r} is already part of the notebook")
        self.cells[cell.id] = cell
        self.cell_order.insert(index, cell.id)
        return cell

    def get_cell(self, cell_id: str) -> Cell:
        """Get a cell by id."""
        try:
            return self.cells[cell_id]
        except KeyError:
            raise CellNotFoundError(cell_id) from None

    def index_of(self, cell_id: str) -> int:
        """Position of a cell in the order."""
        try:
            return self.cell_order.index(cell_id)
        except ValueError:
            raise CellNotFoundError(cell_id) from None

    def previous_id(self, cell_id: str) -> Optional[str]:
        """Id of the cell before cell_id, or None if it is first."""
        index = self.index_of(cell_id)
        return self.cell_order[index - 1] if index > 0 else None

    def next_id(self, cell_id: str) -> Optional[str]:
        """Id of the cell after cell_id, or None if it is last."""
        index = self.index_of(cell_id)
        if index + 1 < len(self.cell_order):
            return self.cell_order[index + 1]
        return None

    def ordered_cells(self) -> list[Cell]:
        return [self.cells[cell_id] for cell_id in self.cell_order]

    def codemirror_mode(self) -> Union[str, dict[str, Any]]:
        """Editor language mode declared by the notebook metadata."""
        language_info = self.metadata.get("language_info") or {}
        if language_info.get("codemirror_mode"):
            return language_info["codemirror_mode"]
        for section in ("kernel_info", "kernelspec"):
            language = (self.metadata.get(section) or {}).get("language")
            if language:
                return language
        return "text"
