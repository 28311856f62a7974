"""Geometry utilities for pallet and container packing."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Container, Dimensions, PalletTemplate, Placement

# Tolerance (cm) for comparisons after unit conversion.
EPSILON = 1e-6

Size = tuple[float, float, float]
Bounds = tuple[float, float, float, float, float, float]


def boxes_overlap(a: Bounds, b: Bounds) -> bool:
    """
    Axis-aligned bounding box (AABB) overlap test.

    a, b are bounds: (x1, y1, z1, x2, y2, z2)

    Overlap exists only if they overlap on ALL 3 axes with positive volume.
    Touching faces/edges (ax2 == bx1) is NOT considered overlap.
    """
    ax1, ay1, az1, ax2, ay2, az2 = a
    bx1, by1, bz1, bx2, by2, bz2 = b

    return (
        (ax1 < bx2 - EPSILON and ax2 > bx1 + EPSILON)
        and (ay1 < by2 - EPSILON and ay2 > by1 + EPSILON)
        and (az1 < bz2 - EPSILON and az2 > bz1 + EPSILON)
    )


def as_size(dims: "Dimensions") -> Size:
    return float(dims.length), float(dims.width), float(dims.height)


def yaw_orientations(dims: "Dimensions") -> list[tuple[Size, float]]:
    """
    Allowed orientations of a unit with its top side kept up.

    Returns (L, W, H) with the rotation about the vertical axis in degrees:
      0:  (L, W, H) as given
      90: (W, L, H) turned a quarter about z
    Square footprints yield a single orientation.
    """
    L, W, H = as_size(dims)
    out = [((L, W, H), 0.0)]
    if not math.isclose(L, W, abs_tol=EPSILON):
        out.append(((W, L, H), 90.0))
    return out


def fits_within(size: Size, envelope: Size) -> bool:
    return all(s <= e + EPSILON for s, e in zip(size, envelope))


def count_along(space: float, step: float) -> int:
    """How many whole steps fit in ``space``, tolerant of conversion rounding."""
    if step <= 0 or space <= 0:
        return 0
    return max(0, math.floor((space + EPSILON) / step))


def placement_bounds(placement: "Placement") -> list[Bounds]:
    """Bounds of every unit in a placement run (units advance along x)."""
    L, W, H = placement.size
    x, y, z = placement.position.x, placement.position.y, placement.position.z
    return [
        (x + i * L, y, z, x + (i + 1) * L, y + W, z + H)
        for i in range(placement.quantity)
    ]


def pallet_columns(
    container: "Container",
    pallet: "PalletTemplate",
) -> tuple[list[tuple[float, float]], bool]:
    """
    Floor positions for pallet stacks.

    Tries the pallet both ways round on the container floor and keeps the
    orientation with more positions (ties keep the pallet as given).

    Returns:
        (positions, rotated) where positions are the (x, y) near corners of
        each column and rotated is True when the pallet is turned 90 degrees.
    """
    if pallet.height > container.height + EPSILON:
        return [], False

    positions: list[tuple[float, float]] = []
    rotated = False
    for (step_x, step_y, _), yaw in yaw_orientations(pallet.dimensions):
        nx = count_along(container.length, step_x)
        ny = count_along(container.width, step_y)
        if nx * ny > len(positions):
            positions = [(i * step_x, j * step_y) for j in range(ny) for i in range(nx)]
            rotated = yaw != 0.0
    return positions, rotated
