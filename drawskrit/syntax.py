# drawskrit/syntax.py
"""
Tokenizer, symbol translation and row parser for the drawskrit language.

A drawskrit row is a flat sequence of words. Property words (colors, sizes,
line styles, ...) accumulate until a shape word, a quoted label or a meta word
consumes them. Unknown words are silently ignored: the language has no error
channel, a bad row simply draws nothing.

Example rows:
    "2 red squares"              # two red squares, one per column
    "circle on square"           # a circle stacked on a square in one cell
    "blue background"            # meta instruction, applies to later rows
    "border left right 1/4"      # inset the drawing area on two edges
    "'Hello' big green circle"   # a label followed by a circle
"""
import re
from dataclasses import asdict, dataclass, field, replace
from functools import reduce
from typing import List, Mapping

from .model import (
    BORDER_POSITIONS, SHAPE_KINDS, Background, Blank, Border, CompositionGroup,
    Label, Shape, ShapeDefaults, StyleOverrides,
)


## --- Vocabulary ---
SYMBOLS = {
    "_": "blank",
    "#": "square",
    "o": "circle",
    "[]": "rectangle",
    "()": "ellipse",
    "/\\": "triangle",
    "-": "line",
}
QUOTES = ('"', "'")
COMPOSITION_KEYWORD = "on"
BLANK_KEYWORDS = frozenset({"blank", "blanks"})
SHAPE_KEYWORDS = {**{kind: kind for kind in SHAPE_KINDS}, **{kind + "s": kind for kind in SHAPE_KINDS}}
COLORS = (
    "aqua", "black", "blue", "fuchsia", "gray", "green", "lime", "maroon", "navy",
    "olive", "orange", "purple", "red", "silver", "teal", "white", "yellow",
)
SIZES = ("tiny", "small", "big", "huge")
LINE_STYLES = ("dashed", "dotted", "solid")
LINE_WIDTHS = ("thin", "thick", "fat")
FILL_MODES = ("filled", "empty")
ORIENTATIONS = ("horizontal", "vertical")
MAX_CARDINALITY = 1000  # larger repeat counts are clamped

# property word -> StyleOverrides field it sets
PROPERTY_KEYWORDS = {
    **dict.fromkeys(COLORS, "color"),
    **dict.fromkeys(SIZES, "size"),
    **dict.fromkeys(LINE_STYLES, "line_style"),
    **dict.fromkeys(LINE_WIDTHS, "line_width"),
    **dict.fromkeys(FILL_MODES, "fill_mode"),
    **dict.fromkeys(ORIENTATIONS, "orientation"),
}

_QUOTED = re.compile(r'"(.*)"|\'(.*)\'', re.DOTALL)
_INTEGER = re.compile(r"[0-9]+")
# searched, so "1/4," still counts; longer digit runs are not ratios
_RATIO = re.compile(r"(?<![0-9])([0-9]{1,9})/([0-9]{1,9})(?![0-9])")


## --- Tokenizer ---
def split_line(line: str) -> List[str]:
    """
    Splits one line into whitespace-separated tokens, keeping quoted runs whole.

    A single or double quote opens a run that is copied verbatim, quotes
    included, until the same quote character closes it. The closing quote ends
    the token. An unterminated run extends to the end of the line.

    Args:
        line: One line of drawskrit text

    Returns:
        List of non-empty tokens in order of appearance

    Examples:
        >>> split_line('red "Hello world" square')
        ['red', '"Hello world"', 'square']
        >>> split_line("'unterminated label")
        ["'unterminated label"]
    """
    tokens = []
    value = ""
    quote = None
    for character in line:
        if quote is not None:
            value += character
            if character == quote:
                tokens.append(value)
                value, quote = "", None
        elif character in QUOTES:
            value += character
            quote = character
        elif character.isspace():
            if value:
                tokens.append(value)
                value = ""
        else:
            value += character
    if value:
        tokens.append(value)
    return tokens


def translate_symbol(token: str) -> str:
    """
    Maps shorthand symbols to their keyword, e.g. ``#`` -> ``square``.

    Any other token is returned unchanged.
    """
    return SYMBOLS.get(token, token)


## --- Row Accumulator ---
@dataclass(frozen=True)
class Pending:
    """Properties collected since the last shape, label or meta word."""
    style: StyleOverrides = field(default_factory=StyleOverrides)
    cardinality: int = 1
    border_positions: tuple = ()
    border_ratio: float | None = None


@dataclass(frozen=True)
class RowState:
    pending: Pending = field(default_factory=Pending)
    after_shape: bool = False
    composition_pending: bool = False
    cells: tuple = ()
    meta: tuple = ()  # (category, instruction) pairs in declaration order
    open_border: bool = False  # border words may still amend the last meta instruction


@dataclass(frozen=True)
class RowResult:
    meta: Mapping
    cells: tuple


def _defined(**values) -> dict:
    return {name: value for name, value in values.items() if value is not None}


# meta word -> builder from pending properties; unset fields take the
# category's built-in default, never the previously active instruction
META_BUILDERS = {
    "background": lambda p: Background(**_defined(color=p.style.color)),
    "shapes": lambda p: ShapeDefaults(**_defined(**asdict(p.style))),
    "border": lambda p: Border(positions=frozenset(p.border_positions), **_defined(ratio=p.border_ratio)),
}


def _compose(cell, instruction):
    if isinstance(cell, CompositionGroup):
        return CompositionGroup(cell.instructions + (instruction,))
    return CompositionGroup((cell, instruction))


def _emit(state: RowState, instructions: tuple) -> RowState:
    """Appends emitted shapes/labels, stacking the first onto the previous cell after ``on``."""
    cells = state.cells
    if instructions and state.composition_pending and cells and not isinstance(cells[-1], Blank):
        cells = cells[:-1] + (_compose(cells[-1], instructions[0]),)
        instructions = instructions[1:]
    return replace(state, pending=Pending(), cells=cells + tuple(instructions),
                   after_shape=True, composition_pending=False, open_border=False)


def _amend_border(state: RowState, **changes) -> RowState:
    """Updates the border declared earlier in the row (``border left 1/4``)."""
    category, border = state.meta[-1]
    return replace(state, meta=state.meta[:-1] + ((category, replace(border, **changes)),))


## --- Token Handlers ---
# Each handler returns the next state, or None when the token is not its kind.
def _handle_meta(state: RowState, keyword: str, token: str) -> RowState | None:
    builder = META_BUILDERS.get(keyword)
    if builder is None:
        return None
    instruction = builder(state.pending)
    return replace(state, pending=Pending(), composition_pending=False,
                   meta=state.meta + ((instruction.category, instruction),),
                   open_border=keyword == "border")


def _handle_blank(state: RowState, keyword: str, token: str) -> RowState | None:
    if keyword not in BLANK_KEYWORDS:
        return None
    blanks = (Blank(),) * state.pending.cardinality
    return replace(state, pending=Pending(), cells=state.cells + blanks,
                   composition_pending=False, open_border=False)


def _handle_shape(state: RowState, keyword: str, token: str) -> RowState | None:
    kind = SHAPE_KEYWORDS.get(keyword)
    if kind is None:
        return None
    shape = Shape(kind=kind, style=state.pending.style)
    return _emit(state, (shape,) * state.pending.cardinality)


def _handle_label(state: RowState, keyword: str, token: str) -> RowState | None:
    if not _QUOTED.fullmatch(token):
        return None
    # pending color/orientation style the text, not a shape
    style = state.pending.style
    label = Label(text=token[1:-1], text_color=style.color, size=style.size,
                  text_orientation=style.orientation)
    return _emit(state, (label,) * state.pending.cardinality)


def _handle_property(state: RowState, keyword: str, token: str) -> RowState | None:
    pending = state.pending
    name = PROPERTY_KEYWORDS.get(keyword)
    if name is not None:
        pending = replace(pending, style=replace(pending.style, **{name: keyword}))
    elif keyword in BORDER_POSITIONS:
        if state.open_border:
            return _amend_border(state, positions=state.meta[-1][1].positions | {keyword})
        pending = replace(pending, border_positions=pending.border_positions + (keyword,))
    else:
        return None
    return replace(state, pending=pending)


def _handle_cardinality(state: RowState, keyword: str, token: str) -> RowState | None:
    if not _INTEGER.fullmatch(keyword):
        return None
    digits = keyword.lstrip("0") or "0"
    # compare lengths first: int() refuses digit strings longer than sys.get_int_max_str_digits()
    if len(digits) > len(str(MAX_CARDINALITY)):
        cardinality = MAX_CARDINALITY
    else:
        cardinality = min(int(digits), MAX_CARDINALITY)
    return replace(state, pending=replace(state.pending, cardinality=cardinality))


def _handle_ratio(state: RowState, keyword: str, token: str) -> RowState | None:
    match = _RATIO.search(keyword)
    if match is None:
        return None
    numerator, denominator = int(match.group(1)), int(match.group(2))
    if denominator == 0:
        return state
    ratio = min(numerator / denominator, 1.0)
    if state.open_border:
        return _amend_border(state, ratio=ratio)
    return replace(state, pending=replace(state.pending, border_ratio=ratio))


TOKEN_HANDLERS = (
    _handle_meta,
    _handle_blank,
    _handle_shape,
    _handle_label,
    _handle_property,
    _handle_cardinality,
    _handle_ratio,
)


def _step(state: RowState, token: str) -> RowState:
    keyword = translate_symbol(token).lower()
    if keyword == COMPOSITION_KEYWORD and state.after_shape:
        return replace(state, composition_pending=True)

    state = replace(state, after_shape=False)
    for handler in TOKEN_HANDLERS:
        next_state = handler(state, keyword, token)
        if next_state is not None:
            return next_state
    return state


## --- Row Parser ---
def parse_row(line: str) -> RowResult:
    """
    Parses a single row into meta instructions and grid cells.

    Tokens are folded left to right through TOKEN_HANDLERS; the first handler
    that recognises a token produces the next accumulator state. Tokens no
    handler recognises are dropped.

    Args:
        line: One line of drawskrit text (comment/layer markers already handled)

    Returns:
        RowResult with ``meta`` (category -> MetaInstruction, last one wins)
        and ``cells`` (tuple of instructions and CompositionGroups)

    Examples:
        >>> parse_row("2 red squares").cells
        (Shape(kind='square', style=StyleOverrides(color='red', ...)), Shape(kind='square', ...))
        >>> parse_row("circle on square").cells
        (CompositionGroup(instructions=(Shape(kind='circle', ...), Shape(kind='square', ...))),)
    """
    state = reduce(_step, split_line(line), RowState())
    return RowResult(meta=dict(state.meta), cells=state.cells)
