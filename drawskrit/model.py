# drawskrit/model.py
"""
Data model for parsed drawskrit documents.

A document is a list of layers, a layer is a list of rows, and a row is a tuple
of cells plus a frozen snapshot of the meta instructions that were active when
the row was parsed. Every type here is an immutable dataclass so a parsed
document can be shared, compared and hashed freely (a row hashes by its
cells; its meta snapshot only takes part in equality).

Instruction variants:
- Blank: an empty grid cell
- Shape: one of SHAPE_KINDS with optional style overrides
- Label: a quoted text string

Meta instruction variants (keyed by their ``category``):
- Background: background color of the grid
- ShapeDefaults: fallback style for every unset Shape/Label field
- Border: inset of the drawing area relative to the surface
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Union


SHAPE_KINDS = ("square", "rectangle", "circle", "ellipse", "triangle", "line", "smile")
ROUND_KINDS = frozenset({"square", "circle", "triangle", "line"})
ELONGATED_KINDS = frozenset({"rectangle", "ellipse", "smile"})
BORDER_POSITIONS = ("left", "right", "top", "bottom")


## --- Drawing Instructions ---
@dataclass(frozen=True)
class StyleOverrides:
    """Optional, inheritable style fields. ``None`` means "use the row's ShapeDefaults"."""
    color: str | None = None
    size: str | None = None
    line_style: str | None = None
    line_width: str | None = None
    fill_mode: str | None = None
    orientation: str | None = None


@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class Shape:
    kind: str
    style: StyleOverrides = field(default_factory=StyleOverrides)


@dataclass(frozen=True)
class Label:
    text: str
    text_color: str | None = None
    size: str | None = None
    text_orientation: str | None = None


Instruction = Union[Blank, Shape, Label]


@dataclass(frozen=True)
class CompositionGroup:
    """Instructions stacked into a single grid cell, in declaration order."""
    instructions: tuple

    def render_order(self) -> tuple:
        # first declared paints last, i.e. on top
        return tuple(reversed(self.instructions))


Cell = Union[Instruction, CompositionGroup]


## --- Meta Instructions ---
@dataclass(frozen=True)
class Background:
    color: str = "white"
    category = "background"


@dataclass(frozen=True)
class ShapeDefaults:
    color: str = "black"
    size: str | None = None
    line_style: str = "solid"
    line_width: str = "thin"
    fill_mode: str = "empty"
    orientation: str = "horizontal"
    category = "shapes"


@dataclass(frozen=True)
class Border:
    positions: frozenset = frozenset()
    ratio: float = 0.0
    category = "border"


MetaInstruction = Union[Background, ShapeDefaults, Border]


def initial_meta() -> dict:
    """The meta state every parse starts from."""
    return {Background.category: Background(), ShapeDefaults.category: ShapeDefaults()}


## --- Document Structure ---
@dataclass(frozen=True)
class Row:
    cells: tuple
    meta: Mapping[str, MetaInstruction] = field(hash=False)  # read-only proxy, compared but not hashed

    @property
    def column_count(self) -> int:
        return len(self.cells)

    @property
    def shape_defaults(self) -> ShapeDefaults:
        return self.meta.get(ShapeDefaults.category, ShapeDefaults())

    @property
    def background(self) -> Background:
        return self.meta.get(Background.category, Background())

    @property
    def border(self) -> Border | None:
        return self.meta.get(Border.category)


def freeze_meta(meta: Mapping[str, MetaInstruction]) -> Mapping[str, MetaInstruction]:
    """Read-only copy of a meta map. Values are frozen, so a shallow copy is a full snapshot."""
    return MappingProxyType(dict(meta))


@dataclass(frozen=True)
class Document:
    layers: tuple

    def __iter__(self):
        return iter(self.layers)

    def __len__(self):
        return len(self.layers)
