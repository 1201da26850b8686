#!/usr/bin/env python3
"""
Render a populated graticule as a top-down hexagon map.

Usage:
    python -m utils.render_graticule [output.png] [--hex-size N] [--config config.yaml]
"""
import logging
import math
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

import numpy as np
from PIL import Image, ImageDraw

from cell import Cell
from graticule import Graticule
from graticule_populator import populate
from utils.config_loader import Config, DEFAULT_CONFIG_PATH, configure_logging, summary

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = (240, 240, 240)
CELL_COLOR = (150, 200, 100)
OCCUPIED_COLOR = (210, 180, 120)
BORDER_COLOR = (50, 50, 50)
FACING_COLOR = (120, 30, 30)


def _drawable_cells(graticule: Graticule) -> List[Cell]:
    """Cells that carry coordinates; other payloads are skipped."""
    cells = []
    for cell in graticule.iter_cells():
        if isinstance(cell, Cell):
            cells.append(cell)
        else:
            logger.warning(f"Skipping non-Cell payload {cell!r}")
    return cells


def ground_bounds(vertices: Iterable[np.ndarray]) -> Tuple[float, float, float, float]:
    """
    Bounding box of vertices on the ground plane.

    Returns:
        (min_x, min_z, max_x, max_z)
    """
    stacked = np.vstack(list(vertices))
    return (
        float(stacked[:, 0].min()),
        float(stacked[:, 2].min()),
        float(stacked[:, 0].max()),
        float(stacked[:, 2].max()),
    )


def render_graticule(
    graticule: Graticule,
    output_path,
    hex_pixel_size: int = 24,
    margin: int = 8,
) -> Tuple[int, int]:
    """
    Render every cell of a graticule to a PNG.

    +x points right and +z points up in the image. Occupied cells are
    filled differently and show a tick towards the occupant's facing.

    Args:
        graticule: Initialised graticule holding Cell objects
        output_path: PNG file to write
        hex_pixel_size: Hex radius in pixels
        margin: Blank border in pixels

    Returns:
        (width, height) of the written image

    Raises:
        ValueError: If the graticule holds no cells
    """
    cells = _drawable_cells(graticule)
    if not cells:
        raise ValueError(f"Nothing to render: {graticule} holds no cells")

    meshes = [cell.geometry.mesh_vertices_at(cell.coordinates) for cell in cells]
    min_x, min_z, max_x, max_z = ground_bounds(meshes)

    # Pixels per world unit; the largest cell is drawn hex_pixel_size wide in radius
    scale = hex_pixel_size / max(cell.geometry.radius for cell in cells)
    img_width = int(math.ceil((max_x - min_x) * scale)) + 2 * margin
    img_height = int(math.ceil((max_z - min_z) * scale)) + 2 * margin

    def to_pixel(vertex: np.ndarray) -> Tuple[float, float]:
        return (
            margin + (vertex[0] - min_x) * scale,
            margin + (max_z - vertex[2]) * scale,
        )

    logger.info(f"Rendering {len(cells)} cells to {img_width}x{img_height} image...")

    img = Image.new('RGB', (img_width, img_height), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(img)

    for cell, mesh in zip(cells, meshes):
        # Element 0 is the center, 1-6 the outline
        outline = [to_pixel(v) for v in mesh[1:]]
        fill = OCCUPIED_COLOR if cell.occupant is not None else CELL_COLOR
        draw.polygon(outline, fill=fill, outline=BORDER_COLOR)

        if cell.occupant is not None:
            center, rotation = mesh[0], cell.geometry.face(cell.occupant.direction)
            tip = center + rotation @ np.array([0.0, 0.0, cell.geometry.apothem * 0.6])
            draw.line([to_pixel(center), to_pixel(tip)], fill=FACING_COLOR, width=2)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(output_path)
    logger.info(f"Graticule rendered to: {output_path}")

    return img.size


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description='Render a hex graticule')
    parser.add_argument('output', nargs='?', default=None, help='Output PNG file')
    parser.add_argument('--config', default=str(DEFAULT_CONFIG_PATH), help='Path to config.yaml')
    parser.add_argument('--hex-size', type=int, default=None, help='Hex radius in pixels')

    args = parser.parse_args(argv)

    config = Config(args.config)
    configure_logging(config)
    logger.info(f"Configuration: {summary(config)}")

    graticule = config.build_graticule()
    populate(graticule)

    output = args.output or config.render_output_path
    hex_size = args.hex_size or config.hex_pixel_size
    render_graticule(graticule, output, hex_size, config.render_margin)
    return 0


if __name__ == '__main__':
    sys.exit(main())
