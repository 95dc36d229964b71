# drawskrit/render.py
import argparse
import os
import time
from .core import (
    CANVAS_HEIGHT, CANVAS_WIDTH, export_image, render_from_csv, render_program
)
from .renderers.grid import GridRenderer


def _read_program(path: str) -> str:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Program file not found: {path}")
    with open(path, "r", encoding="utf-8") as program_file:
        return program_file.read()


def render_file(renderer, program_path: str, output_path: str, width: int, height: int):
    """Renders one program file to a PNG."""
    image_array = render_program(renderer, _read_program(program_path), width, height)
    export_image(image_array, output_path)
    print(f"✅ Rendered '{program_path}' to: {output_path}")


def watch_file(renderer, program_path: str, output_path: str, width: int, height: int,
               interval: float = 0.5, max_renders: int | None = None):
    """
    Re-renders a program file every time its modification time changes.

    The whole file is parsed again on every change; there is no incremental
    state. Runs until interrupted, or until ``max_renders`` renders were made.
    """
    print(f"🔍 Watching '{program_path}' (Ctrl+C to stop)...")
    last_mtime = None
    renders = 0
    try:
        while max_renders is None or renders < max_renders:
            mtime = os.path.getmtime(program_path)
            if mtime != last_mtime:
                last_mtime = mtime
                render_file(renderer, program_path, output_path, width, height)
                renders += 1
            else:
                time.sleep(interval)
    except KeyboardInterrupt:
        print("\n✅ Stopped watching.")


def main(argv=None):
    """Main execution function with command-line parsing."""
    parser = argparse.ArgumentParser(
        description="Renders drawskrit grid drawings to PNG images.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    # --- Parser for rendering a single program ---
    parser_single = subparsers.add_parser("single", help="Render a single program file.")
    parser_single.add_argument("program", type=str, help="Path to the drawskrit program text.")
    parser_single.add_argument("output", type=str, help="The path to save the output PNG image.")

    # --- Parser for rendering from a CSV file ---
    parser_csv = subparsers.add_parser("csv", help="Render all programs from a CSV file.")
    parser_csv.add_argument("name", type=str, help="Base name of the CSV in 'output/' (e.g., 'gallery').")
    parser_csv.add_argument("--col", type=str, default="program_string", help="Column with drawskrit programs.")

    # --- Parser for re-rendering on every change ---
    parser_watch = subparsers.add_parser("watch", help="Re-render a program file whenever it changes.")
    parser_watch.add_argument("program", type=str, help="Path to the drawskrit program text.")
    parser_watch.add_argument("output", type=str, help="The path to save the output PNG image.")
    parser_watch.add_argument("--interval", type=float, default=0.5, help="Polling interval in seconds.")

    for sub in (parser_single, parser_csv, parser_watch):
        sub.add_argument("--width", type=int, default=CANVAS_WIDTH, help="Image width in pixels.")
        sub.add_argument("--height", type=int, default=CANVAS_HEIGHT, help="Image height in pixels.")

    args = parser.parse_args(argv)
    renderer = GridRenderer()

    # --- Execute the chosen command ---
    if args.command == "single":
        print(f"🎨 Rendering '{args.program}'...")
        render_file(renderer, args.program, args.output, args.width, args.height)

    elif args.command == "csv":
        print(f"🎨 Rendering CSV '{args.name}.csv'...")
        render_from_csv(renderer, args.name, program_col=args.col, width=args.width, height=args.height)

    elif args.command == "watch":
        watch_file(renderer, args.program, args.output, args.width, args.height, interval=args.interval)

if __name__ == "__main__":
    main()
