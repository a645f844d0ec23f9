"""Moore-neighbor boundary tracing of binary masks."""
from typing import List, Tuple
import logging

import numpy as np

from tracevec.types import Mask, Path, Point

logger = logging.getLogger(__name__)

# Clockwise from north, y axis pointing down
DIRECTIONS = [
    (0, -1), (1, -1), (1, 0), (1, 1),
    (0, 1), (-1, 1), (-1, 0), (-1, -1),
]

OPACITY_THRESHOLD = 128


def find_boundary_pixels(opaque: np.ndarray) -> np.ndarray:
    """
    Find opaque pixels that can start a trace.

    A pixel qualifies if it touches the image edge or has a transparent
    4-connected neighbor. Diagonal-only contact does not count.

    Args:
        opaque: (H, W) boolean array

    Returns:
        (H, W) boolean array of trace candidates
    """
    padded = np.pad(opaque, 1, mode='constant', constant_values=False)
    interior = (
        padded[:-2, 1:-1] & padded[2:, 1:-1] &
        padded[1:-1, :-2] & padded[1:-1, 2:]
    )
    return opaque & ~interior


def _walk_boundary(
    opaque: List[List[bool]],
    start_x: int,
    start_y: int,
    max_steps: int
) -> List[Tuple[int, int]]:
    """
    Follow a boundary from a start pixel until it closes or dead-ends.

    opaque is padded by one transparent pixel on every side, so lookups
    never go out of range.
    """
    path = []
    x, y = start_x, start_y
    direction = 0

    for _ in range(max_steps):
        path.append((x, y))

        # Two steps counter-clockwise from the heading
        search = (direction + 6) % 8
        for i in range(8):
            d = (search + i) % 8
            dx, dy = DIRECTIONS[d]
            if opaque[y + dy + 1][x + dx + 1]:
                direction = d
                x += dx
                y += dy
                break
        else:
            # Isolated pixel
            return path

        if x == start_x and y == start_y:
            return path

    logger.debug(f"Boundary walk from ({start_x}, {start_y}) hit step limit {max_steps}")
    return path


def trace_contours(mask: Mask) -> List[Path]:
    """
    Trace every boundary of the opaque regions in a mask.

    The mask is scanned row-major; each unvisited boundary pixel starts an
    8-connected walk. Outer boundaries and hole boundaries come out of the
    same scan, in the order their first pixel is reached. Pixels of every
    kept path are marked visited so no boundary is traced twice. Paths of
    two points or fewer are discarded.

    Args:
        mask: (H, W) array; values above 128 are opaque

    Returns:
        List of closed paths in pixel coordinates
    """
    if mask.size == 0:
        return []

    h, w = mask.shape[:2]
    opaque = mask > OPACITY_THRESHOLD
    candidates = find_boundary_pixels(opaque)

    padded = np.pad(opaque, 1, mode='constant', constant_values=False).tolist()
    visited = np.zeros(h * w, dtype=bool)
    max_steps = 8 * h * w

    paths = []
    dropped = 0
    for index in np.flatnonzero(candidates.ravel()):
        index = int(index)
        if visited[index]:
            continue

        y, x = divmod(index, w)
        pixels = _walk_boundary(padded, x, y, max_steps)

        if len(pixels) <= 2:
            dropped += 1
            continue

        for px, py in pixels:
            visited[py * w + px] = True
        paths.append([Point(float(px), float(py)) for px, py in pixels])

    if dropped:
        logger.debug(f"Dropped {dropped} degenerate paths")

    return paths
