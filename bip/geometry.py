from __future__ import annotations

from typing import Tuple

Point = Tuple[float, float]
NodeId = int

# Positions closer than this on both axes are the same node.
EPSILON = 1e-4


def dist2(a: Point, b: Point) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def link_cost(a: Point, b: Point) -> float:
    """
    Transmit power needed for a to reach b: a * r^b with a = 1 and b = 2,
    i.e. the squared euclidean distance.
    """
    return dist2(a, b)


def incremental_cost(position: Point, power: float, target: Point) -> float:
    """Extra power a node already transmitting at `power` needs to reach `target`.

    Negative when the target already lies inside the current radius; such a
    value is kept as is and simply wins the round.
    """
    return link_cost(position, target) - power


def promotion_cost(position: Point, target: Point) -> float:
    return link_cost(position, target)


def same_position(a: Point, b: Point, eps: float = EPSILON) -> bool:
    return abs(a[0] - b[0]) < eps and abs(a[1] - b[1]) < eps
