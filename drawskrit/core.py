# drawskrit/core.py
"""
Core functionality for the drawskrit renderer.

This module provides the pieces between a drawskrit text and a PNG file:
- Document builder turning a full program text into layers of rows
- Cairo painter executing draw commands on an image surface
- Image export utilities
- CSV batch processing capabilities

A drawskrit program is line oriented. Each line describes one row of shapes,
lines starting with ';' are comments and lines starting with '=' start a new
layer painted over the previous ones. Rows are parsed by drawskrit.syntax and
laid out by a renderer from drawskrit.renderers.
"""
import os
import imageio
import numpy as np
import pandas as pd
import cairo
from tqdm import tqdm

from .model import Document, Row, freeze_meta, initial_meta
from .outlines import shape_outline
from .renderers.base import Clear, DrawShape, DrawText, FillRect
from .syntax import parse_row


## --- Core Constants ---
CANVAS_WIDTH = 512  # Default output image width in pixels
CANVAS_HEIGHT = 512  # Default output image height in pixels
COMMENT_MARKER = ";"
LAYER_MARKER = "="
FONT_FACE = "Arial"

# CSS values of the color words, as (r, g, b) in [0, 1]
COLOR_RGB = {
    "aqua": (0.0, 1.0, 1.0),
    "black": (0.0, 0.0, 0.0),
    "blue": (0.0, 0.0, 1.0),
    "fuchsia": (1.0, 0.0, 1.0),
    "gray": (128 / 255, 128 / 255, 128 / 255),
    "green": (0.0, 128 / 255, 0.0),
    "lime": (0.0, 1.0, 0.0),
    "maroon": (128 / 255, 0.0, 0.0),
    "navy": (0.0, 0.0, 128 / 255),
    "olive": (128 / 255, 128 / 255, 0.0),
    "orange": (1.0, 165 / 255, 0.0),
    "purple": (128 / 255, 0.0, 128 / 255),
    "red": (1.0, 0.0, 0.0),
    "silver": (192 / 255, 192 / 255, 192 / 255),
    "teal": (0.0, 128 / 255, 128 / 255),
    "white": (1.0, 1.0, 1.0),
    "yellow": (1.0, 1.0, 0.0),
}


## --- Document Builder ---
def parse_program(program_string: str) -> Document:
    """
    Parses a complete drawskrit program into a Document.

    Meta instructions (background, shapes, border) update a running state that
    is shared by all layers. Every row that draws something keeps a read-only
    snapshot of that state as it stands after the row's own meta instructions,
    so later changes never affect rows already parsed. Rows that draw nothing
    are not kept and do not count towards the layer's row count.

    Args:
        program_string: Complete program text, rows separated by newlines

    Returns:
        Document with at least one (possibly empty) layer

    Examples:
        >>> doc = parse_program("blue background\\nred circle\\n=\\n2 squares")
        >>> [len(layer) for layer in doc]
        [1, 1]
        >>> doc.layers[1][0].background.color
        'blue'
    """
    layers = []
    rows = []
    meta = initial_meta()
    for line in program_string.split("\n"):
        line = line.strip()
        if line.startswith(COMMENT_MARKER):
            continue
        if line.startswith(LAYER_MARKER):
            layers.append(tuple(rows))
            rows = []
            continue
        result = parse_row(line)
        meta.update(result.meta)
        if result.cells:
            rows.append(Row(cells=result.cells, meta=freeze_meta(meta)))
    layers.append(tuple(rows))
    return Document(tuple(layers))


## --- Cairo Painter ---
def color_rgb(name: str) -> tuple:
    if name not in COLOR_RGB:
        raise ValueError(f"Unknown color: {name}")
    return COLOR_RGB[name]


def _paint_clear(ctx, command: Clear):
    ctx.set_source_rgb(1, 1, 1)  # White page
    ctx.paint()


def _paint_fill_rect(ctx, command: FillRect):
    x, y = command.center
    ctx.set_source_rgb(*color_rgb(command.color))
    ctx.rectangle(x - command.half_width, y - command.half_height,
                  2 * command.half_width, 2 * command.half_height)
    ctx.fill()


def _paint_shape(ctx, command: DrawShape):
    points, closed = shape_outline(command.kind, command.center, command.half_width,
                                   command.half_height, command.rotation)
    ctx.set_source_rgb(*color_rgb(command.color))
    ctx.set_line_width(command.line_width)
    ctx.set_dash(list(command.dash))
    ctx.move_to(points[0, 0], points[0, 1])
    for point in points[1:]:
        ctx.line_to(point[0], point[1])
    if closed:
        ctx.close_path()
        if command.filled:
            ctx.fill_preserve()
    ctx.stroke()


def _paint_text(ctx, command: DrawText):
    if not command.text:
        return
    ctx.save()
    ctx.set_source_rgb(*color_rgb(command.color))
    ctx.select_font_face(FONT_FACE, cairo.FONT_SLANT_NORMAL, cairo.FONT_WEIGHT_NORMAL)
    ctx.set_font_size(command.font_size)
    x_bearing, y_bearing, text_width, text_height, _, _ = ctx.text_extents(command.text)
    ctx.translate(*command.center)
    ctx.rotate(np.radians(command.rotation))
    # squeeze horizontally into the available width
    if 0 < command.max_width < text_width:
        ctx.scale(command.max_width / text_width, 1.0)
    ctx.move_to(-x_bearing - text_width / 2, -y_bearing - text_height / 2)
    ctx.show_text(command.text)
    ctx.restore()


PAINTERS = {
    Clear: _paint_clear,
    FillRect: _paint_fill_rect,
    DrawShape: _paint_shape,
    DrawText: _paint_text,
}


def render_commands_to_image(
    commands: list,
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT
) -> np.ndarray:
    """
    Paints a list of draw commands to a raster image using Cairo graphics.

    Commands are executed in order, so later commands paint over earlier ones.
    Shapes are stroked with round caps and joins; closed outlines are filled
    first when the command asks for it.

    Args:
        commands: Draw commands as returned by a renderer's evaluate()
        width: Output image width in pixels
        height: Output image height in pixels

    Returns:
        numpy array of shape (height, width, 3) with RGB values [0,1]

    Raises:
        ValueError: If the surface size is not positive or a command is unknown

    Examples:
        >>> commands = GridRenderer().evaluate(parse_program("red circle"), 64, 64)
        >>> render_commands_to_image(commands, 64, 64).shape
        (64, 64, 3)
    """
    width, height = int(width), int(height)
    if width <= 0 or height <= 0:
        raise ValueError(f"Surface size must be positive, got {width}x{height}")
    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
    ctx = cairo.Context(surface)

    # --- Configure Canvas ---
    ctx.set_source_rgb(1, 1, 1)
    ctx.paint()
    ctx.set_line_cap(cairo.LINE_CAP_ROUND)
    ctx.set_line_join(cairo.LINE_JOIN_ROUND)

    for command in commands:
        painter = PAINTERS.get(type(command))
        if painter is None:
            raise ValueError(f"Unknown draw command: {command!r}")
        painter(ctx, command)

    # --- Extract Buffer ---
    surface.flush()
    buf = surface.get_data()
    img_array = np.ndarray(shape=(height, width, 4), dtype=np.uint8, buffer=buf,
                           strides=(surface.get_stride(), 4, 1))
    img_array = img_array[:, :, [2, 1, 0]].astype(np.float32) / 255.0  # Reverse BGRA to RGB
    return img_array


def render_program(renderer, program_string: str, width: int = CANVAS_WIDTH,
                   height: int = CANVAS_HEIGHT) -> np.ndarray:
    """Parses, lays out and paints one program in a single call."""
    commands = renderer.evaluate(parse_program(program_string), width, height)
    return render_commands_to_image(commands, width, height)


def export_image(image_array: np.ndarray, export_path: str):
    """
    Exports a rendered image array to a PNG file.

    Creates the output directory if it doesn't exist.

    Args:
        image_array: RGB image as numpy array with values in [0,1] range
        export_path: File path where the PNG should be saved
    """
    output_dir = os.path.dirname(export_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    imageio.imwrite(export_path, (image_array * 255).round().astype(np.uint8))


## --- CSV Processing Utility ---
def render_from_csv(renderer, name: str, program_col: str = "program_string",
                    width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT,
                    output_root: str = "output") -> pd.DataFrame:
    """
    Batch renders drawskrit programs from a CSV file.

    Reads a CSV file containing programs, renders each one with the provided
    renderer, saves the resulting images and writes an updated CSV with the
    image paths. A program that fails to render is reported and gets an empty
    path; processing continues with the next row.

    Args:
        renderer: A renderer instance (must implement evaluate())
        name: Base name for input CSV file and output directory
        program_col: Column name containing the program texts
        width: Output image width in pixels
        height: Output image height in pixels
        output_root: Directory holding the input CSV and receiving the output

    Input:
        - Reads from: {output_root}/{name}.csv

    Output:
        - Images saved to: {output_root}/{name}/images/{row_index}.png
        - Updated CSV saved to: {output_root}/{name}/rendered.csv

    Returns:
        The updated DataFrame with a ``render_filepath`` column

    Raises:
        FileNotFoundError: If the input CSV file doesn't exist
        KeyError: If the specified program column isn't found in the CSV
    """
    input_csv_path = os.path.join(output_root, f"{name}.csv")
    if not os.path.exists(input_csv_path):
        raise FileNotFoundError(f"Input CSV not found: {input_csv_path}")

    df = pd.read_csv(input_csv_path, keep_default_na=False)
    if program_col not in df.columns:
        raise KeyError(f"Column '{program_col}' not found in {input_csv_path}")

    image_output_dir = os.path.join(output_root, name, "images")
    os.makedirs(image_output_dir, exist_ok=True)

    render_filepaths = []
    for i, row in tqdm(df.iterrows(), desc="Rendering programs", unit="program", leave=False, total=len(df)):
        program_string = str(row[program_col])
        output_path = os.path.join(image_output_dir, f"{i}.png")
        try:
            image_array = render_program(renderer, program_string, width, height)
            export_image(image_array, output_path)
            render_filepaths.append(output_path)
        except Exception as e:
            print(f"❌ Error processing row {i} ('{program_string[:50]}...'): {e}")
            render_filepaths.append("")

    df["render_filepath"] = render_filepaths
    rendered_csv_path = os.path.join(output_root, name, "rendered.csv")
    df.to_csv(rendered_csv_path, index=False)
    print(f"\n✅ Wrote updated CSV with filepaths to: {rendered_csv_path}")
    return df
