"""Polyline simplification using the Ramer-Douglas-Peucker algorithm."""
from typing import List

import numpy as np

from tracevec.types import Path


def squared_segment_distances(
    points: np.ndarray,
    start: np.ndarray,
    end: np.ndarray
) -> np.ndarray:
    """
    Squared distance of each point to the segment start-end.

    The foot of the perpendicular is clamped to the segment, so points
    beyond either end measure to that endpoint.

    Args:
        points: (N, 2) array of (x, y)
        start: Segment start (x, y)
        end: Segment end (x, y)

    Returns:
        (N,) array of squared distances
    """
    delta = end - start
    length_sq = float(np.dot(delta, delta))

    if length_sq > 0:
        t = np.clip((points - start) @ delta / length_sq, 0.0, 1.0)
        nearest = start + t[:, None] * delta
    else:
        nearest = start[None, :]

    diff = points - nearest
    return np.einsum('ij,ij->i', diff, diff)


def simplify_path(path: Path, epsilon: float) -> Path:
    """
    Simplify a path with Ramer-Douglas-Peucker.

    Ranges are processed from an explicit stack instead of recursion, so
    long contours cannot exhaust the interpreter's stack.

    Args:
        path: Points to simplify; the closing edge is not considered
        epsilon: Distance tolerance in pixels, must be >= 0

    Returns:
        Kept points in input order; first and last are always kept.
        Paths shorter than 3 points are returned unchanged.
    """
    if epsilon < 0:
        raise ValueError(f"epsilon must be >= 0, got {epsilon}")

    n = len(path)
    if n < 3:
        return list(path)

    coords = np.array([(p.x, p.y) for p in path], dtype=np.float64)
    epsilon_sq = epsilon * epsilon

    keep = np.zeros(n, dtype=bool)
    keep[0] = keep[-1] = True

    stack = [(0, n - 1)]
    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue

        distances = squared_segment_distances(
            coords[first + 1:last], coords[first], coords[last]
        )
        offset = int(np.argmax(distances))

        if distances[offset] > epsilon_sq:
            index = first + 1 + offset
            keep[index] = True
            stack.append((index, last))
            stack.append((first, index))

    return [p for p, kept in zip(path, keep) if kept]


def simplify_paths(paths: List[Path], epsilon: float) -> List[Path]:
    """Simplify each contour independently."""
    return [simplify_path(p, epsilon) for p in paths]
