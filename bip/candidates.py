from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .errors import AlgorithmInvariantError
from .geometry import NodeId, Point, incremental_cost, promotion_cost
from .partition import CoveragePartition, SourceKind


@dataclass(frozen=True)
class Candidate:
    cost: float
    source: NodeId
    target: NodeId
    kind: SourceKind
    source_position: Point
    target_position: Point


def generate_candidates(part: CoveragePartition) -> Iterator[Candidate]:
    """
    Every way to cover one more node this round:
      - each transmitter against each uncovered node (extra power only)
      - each relay against each uncovered node (full power)

    Transmitters come first, then relays; inside a group, sources in
    insertion order and for each source the uncovered nodes in insertion order.
    """
    for t in part.transmitting.values():
        for target, target_pos in part.uncovered.items():
            yield Candidate(
                cost=incremental_cost(t.position, t.power, target_pos),
                source=t.node,
                target=target,
                kind=SourceKind.EXTEND_TRANSMITTER,
                source_position=t.position,
                target_position=target_pos,
            )

    for relay, relay_pos in part.relays.items():
        for target, target_pos in part.uncovered.items():
            yield Candidate(
                cost=promotion_cost(relay_pos, target_pos),
                source=relay,
                target=target,
                kind=SourceKind.PROMOTE_RELAY,
                source_position=relay_pos,
                target_position=target_pos,
            )


def select_cheapest(candidates: Iterable[Candidate]) -> Candidate:
    """Minimum cost candidate; on ties the first one generated wins."""
    best: Optional[Candidate] = None
    for c in candidates:
        if best is None or c.cost < best.cost:
            best = c
    if best is None:
        raise AlgorithmInvariantError("No candidate to cover an uncovered node")
    return best
