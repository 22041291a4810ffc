from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .candidates import generate_candidates, select_cheapest
from .errors import AlgorithmInvariantError
from .geometry import NodeId, Point
from .partition import CoveragePartition, RoundSnapshot, TransmissionStep, Transmitter

logger = logging.getLogger(__name__)

RoundCallback = Callable[[RoundSnapshot], None]


@dataclass
class BroadcastResult:
    transmitters: List[Transmitter]
    path: List[TransmissionStep]
    total_cost: float
    rounds: int
    positions: List[Point]

    @property
    def source(self) -> Point:
        return self.positions[0]

    def parents(self) -> Dict[NodeId, NodeId]:
        """Parent of each covered node (the source has none)."""
        return {step.target_node: step.source_node for step in self.path}

    def tree_edges(self) -> List[Tuple[Point, Point]]:
        return [(step.source, step.target) for step in self.path]

    def path_cost(self) -> float:
        return sum(step.power_delta for step in self.path)


class BroadcastSimulation:
    """
    BIP round loop.

    Each round generates every way to cover one more node, keeps the
    cheapest and applies it. Runs until no node is left uncovered, i.e.
    exactly n - 1 rounds for n nodes.
    """

    def __init__(self, points: Sequence[Point], on_round: Optional[RoundCallback] = None):
        self.partition = CoveragePartition.start(points)
        self.on_round = on_round
        self.round = 0
        self.path: List[TransmissionStep] = []
        self.snapshots: List[RoundSnapshot] = []

    def done(self) -> bool:
        return self.partition.is_complete()

    def step(self) -> TransmissionStep:
        part = self.partition
        self.round += 1

        best = select_cheapest(generate_candidates(part))
        step = part.apply(best)
        self.path.append(step)
        part.check_invariants()

        logger.debug(
            "Round %d: %s node %d -> node %d, +%g",
            self.round, best.kind.value, best.source, best.target, best.cost,
        )

        snap = part.snapshot(self.round)
        self.snapshots.append(snap)
        if self.on_round is not None:
            self.on_round(snap)
        return step

    def run(self) -> BroadcastResult:
        while not self.done():
            self.step()

        result = self.result()
        # every increment is logged exactly once
        if not math.isclose(result.total_cost, result.path_cost(), rel_tol=1e-9, abs_tol=1e-9):
            raise AlgorithmInvariantError(
                f"Total power {result.total_cost:g} does not match the path log {result.path_cost():g}"
            )
        logger.info(
            "Broadcast tree over %d node(s): %d round(s), %d transmitter(s), total cost %g",
            self.partition.n, result.rounds, len(result.transmitters), result.total_cost,
        )
        return result

    def result(self) -> BroadcastResult:
        transmitters = [t.copy() for t in self.partition.transmitting.values()]
        return BroadcastResult(
            transmitters=transmitters,
            path=list(self.path),
            total_cost=self.partition.total_power(),
            rounds=self.round,
            positions=list(self.partition.positions),
        )


def build_broadcast_tree(points: Sequence[Point], on_round: Optional[RoundCallback] = None) -> BroadcastResult:
    return BroadcastSimulation(points, on_round=on_round).run()
