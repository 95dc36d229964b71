# drawskrit/renderers/base.py
"""
Base renderer class and the draw commands every renderer emits.

A renderer turns a parsed Document into a flat list of draw commands. Draw
commands are fully resolved: every style word has been looked up in the row's
ShapeDefaults and every size has been converted to surface pixels, so a
painter can execute them without knowing anything about the language.
"""
import abc
from dataclasses import dataclass
from typing import Tuple

from ..layout import (
    dash_pattern, font_size, half_extents, line_width, rotation, round_radius,
)
from ..model import (
    ELONGATED_KINDS, ROUND_KINDS, Blank, Document, Label, Shape, ShapeDefaults,
)

Point = Tuple[float, float]


## --- Draw Commands ---
@dataclass(frozen=True)
class Clear:
    width: float
    height: float


@dataclass(frozen=True)
class FillRect:
    center: Point
    half_width: float
    half_height: float
    color: str


@dataclass(frozen=True)
class DrawShape:
    kind: str
    center: Point
    half_width: float
    half_height: float
    rotation: float
    color: str
    line_width: float
    dash: Tuple[float, ...]
    filled: bool


@dataclass(frozen=True)
class DrawText:
    text: str
    center: Point
    font_size: float
    max_width: float
    rotation: float
    color: str


def _round_extents(cell_width, cell_height, size, orientation):
    radius = round_radius(cell_width, cell_height, size)
    return radius, radius


class BaseRenderer(abc.ABC):
    """
    Abstract base class for drawskrit renderers.

    Holds the shared vocabulary: ``primitives`` maps every shape kind to the
    function computing its half extents inside a cell, and ``implementations``
    maps every instruction type to the method that turns it into a draw
    command. Subclasses decide where cells are and must implement evaluate().

    Examples:
        >>> class MyRenderer(BaseRenderer):
        ...     def evaluate(self, document, width, height):
        ...         return []
    """
    def __init__(self):
        self.primitives = {}
        self.implementations = {}
        self._register_shared()

    def _register_shared(self):
        """Registers the shape geometry and instruction handlers common to all renderers."""
        self.primitives.update({kind: _round_extents for kind in ROUND_KINDS})
        self.primitives.update({kind: half_extents for kind in ELONGATED_KINDS})
        self.implementations.update({
            Shape: self._shape_command,
            Label: self._label_command,
            Blank: lambda *args: None,
        })

    @abc.abstractmethod
    def evaluate(self, document: Document, width: float, height: float) -> list:
        """
        Evaluates a parsed document into draw commands for a surface.

        Args:
            document: Parsed Document (see drawskrit.core.parse_program)
            width: Surface width in pixels
            height: Surface height in pixels

        Returns:
            List of draw commands (Clear, FillRect, DrawShape, DrawText) in
            paint order
        """
        raise NotImplementedError

    def instruction_command(self, instruction, defaults: ShapeDefaults, center: Point,
                            cell_width: float, cell_height: float):
        """Resolves one instruction placed in a cell; returns None for blanks."""
        handler = self.implementations.get(type(instruction))
        if handler is None:
            raise ValueError(f"Unknown instruction: {instruction!r}")
        return handler(instruction, defaults, center, cell_width, cell_height)

    def _shape_command(self, shape: Shape, defaults: ShapeDefaults, center: Point,
                       cell_width: float, cell_height: float) -> DrawShape:
        style = shape.style
        size = style.size or defaults.size
        orientation = style.orientation or defaults.orientation
        width_word = style.line_width or defaults.line_width
        half_width, half_height = self.primitives[shape.kind](cell_width, cell_height, size, orientation)
        return DrawShape(
            kind=shape.kind,
            center=center,
            half_width=half_width,
            half_height=half_height,
            rotation=rotation(orientation),
            color=style.color or defaults.color,
            line_width=line_width(width_word),
            dash=dash_pattern(style.line_style or defaults.line_style, width_word),
            filled=(style.fill_mode or defaults.fill_mode) == "filled",
        )

    def _label_command(self, label: Label, defaults: ShapeDefaults, center: Point,
                       cell_width: float, cell_height: float) -> DrawText:
        size = label.size or defaults.size
        return DrawText(
            text=label.text,
            center=center,
            font_size=font_size(cell_width, cell_height, size),
            max_width=2 * round_radius(cell_width, cell_height, size),
            rotation=rotation(label.text_orientation or defaults.orientation),
            color=label.text_color or defaults.color,
        )
