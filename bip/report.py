from __future__ import annotations

from typing import List

from .broadcast import BroadcastResult
from .geometry import Point
from .partition import RoundSnapshot

BANNER = "======================== Final Results ========================"


def _num(v: float) -> str:
    return f"{v:g}"


def _pt(p: Point, sep: str = ", ") -> str:
    return f"({_num(p[0])}{sep}{_num(p[1])})"


def format_round(snap: RoundSnapshot) -> List[str]:
    lines = [f"At the end of round {snap.round}:"]
    for t in snap.transmitters:
        lines.append(f"Transmitting node: Node {_pt(t.position, ',')}, with a power of: {_num(t.power)}")
    for p in snap.uncovered:
        lines.append(f"Uncovered node: {_num(p[0])}, {_num(p[1])}")
    return lines


def format_final(result: BroadcastResult) -> List[str]:
    lines = [BANNER, "Transmitting nodes (at the end): "]
    for t in result.transmitters:
        lines.append(f"Node {_pt(t.position)}, transmitting with a power of: {_num(t.power)}")
    lines.append("Transmission path: ")
    for i, step in enumerate(result.path, start=1):
        lines.append(f"Stage{i}: Node {_pt(step.source)}, increases its power by: {_num(step.power_delta)}")
    lines.append(f"Total transmission cost is: {_num(result.total_cost)}")
    return lines


def print_round(snap: RoundSnapshot) -> None:
    print("\n".join(format_round(snap)))


def print_final(result: BroadcastResult) -> None:
    print("\n".join(format_final(result)))
