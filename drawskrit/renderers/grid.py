# drawskrit/renderers/grid.py
"""
Grid renderer: lays out every layer of a drawskrit document as rows of cells.

Each layer is painted over the whole active rectangle: its rows split the
height evenly and each row splits its width evenly between its own cells, so
rows with different column counts line up on the same vertical rhythm. Only the
first layer paints the background bands; later layers are overlays.

Example:
    >>> renderer = GridRenderer()
    >>> commands = renderer.evaluate(parse_program("red circle\\n2 squares"), 200, 100)
    >>> [type(c).__name__ for c in commands]
    ['Clear', 'FillRect', 'FillRect', 'DrawShape', 'DrawShape', 'DrawShape']
"""
from ..layout import active_rect, cell_center, cell_size
from ..model import CompositionGroup, Document
from .base import BaseRenderer, Clear, FillRect


class GridRenderer(BaseRenderer):
    """Renderer placing each row of a layer in an equal-height band of the surface."""

    def evaluate(self, document: Document, width: float, height: float) -> list:
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        layers = list(document)
        commands = [Clear(width, height)]
        if layers:
            commands.extend(self._background_commands(layers[0], width, height))
        for rows in layers:
            commands.extend(self._layer_commands(rows, width, height))
        return commands

    def _background_commands(self, rows, width, height):
        row_count = len(rows)
        for index, row in enumerate(rows):
            rect = active_rect(width, height, row.border)
            band_height = rect.height / row_count
            yield FillRect(
                center=(rect.left + rect.width / 2, rect.top + (index + 0.5) * band_height),
                half_width=rect.width / 2,
                half_height=band_height / 2,
                color=row.background.color,
            )

    def _layer_commands(self, rows, width, height):
        row_count = len(rows)
        for row_index, row in enumerate(rows):
            rect = active_rect(width, height, row.border)
            cell_width, cell_height = cell_size(rect, row_count, row.column_count)
            defaults = row.shape_defaults
            for column, cell in enumerate(row.cells):
                center = cell_center(rect, row_index, column, row_count, row.column_count)
                instructions = cell.render_order() if isinstance(cell, CompositionGroup) else (cell,)
                for instruction in instructions:
                    command = self.instruction_command(instruction, defaults, center, cell_width, cell_height)
                    if command is not None:
                        yield command
