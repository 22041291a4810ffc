from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple, TYPE_CHECKING

from .errors import AlgorithmInvariantError, MissingSourceError
from .geometry import NodeId, Point, same_position

if TYPE_CHECKING:
    from .candidates import Candidate


class SourceKind(enum.Enum):
    EXTEND_TRANSMITTER = "extend"
    PROMOTE_RELAY = "promote"


@dataclass
class Transmitter:
    node: NodeId
    position: Point
    power: float = 0.0

    def copy(self) -> "Transmitter":
        return Transmitter(self.node, self.position, self.power)


@dataclass(frozen=True)
class TransmissionStep:
    """One round of the path log: `source` raised its power by `power_delta`."""
    source: Point
    power_delta: float
    source_node: NodeId
    target_node: NodeId
    target: Point
    kind: SourceKind


@dataclass(frozen=True)
class RoundSnapshot:
    round: int
    transmitters: Tuple[Transmitter, ...]
    uncovered: Tuple[Point, ...]


@dataclass
class CoveragePartition:
    """
    Splits the nodes into three disjoint groups:
      - transmitting: covered and emitting, with their current power
      - relays:       covered but silent (power 0)
      - uncovered:    not reachable yet

    The dicts are keyed by node id and keep insertion order, which is the
    order candidates are enumerated in.
    """
    positions: List[Point]
    transmitting: Dict[NodeId, Transmitter] = field(default_factory=dict)
    relays: Dict[NodeId, Point] = field(default_factory=dict)
    uncovered: Dict[NodeId, Point] = field(default_factory=dict)

    @staticmethod
    def start(points: Sequence[Point]) -> "CoveragePartition":
        """Only the source (first point) is covered; it transmits with power 0."""
        if not points:
            raise MissingSourceError()
        positions = [(float(p[0]), float(p[1])) for p in points]
        part = CoveragePartition(positions=positions)
        part.transmitting[0] = Transmitter(0, positions[0], 0.0)
        for i in range(1, len(positions)):
            part.uncovered[i] = positions[i]
        return part

    @property
    def n(self) -> int:
        return len(self.positions)

    def is_complete(self) -> bool:
        return not self.uncovered

    def total_power(self) -> float:
        return sum(t.power for t in self.transmitting.values())

    def apply(self, cand: "Candidate") -> TransmissionStep:
        """
        Applies the round's winning candidate and returns the step to log.

        Extending a transmitter adds the cost to its power; promoting a relay
        moves it to the transmitting group with power = cost. The target then
        leaves the uncovered group and becomes a relay.

        The candidate must name its nodes at their loaded positions, within
        the 1e-4 tolerance.
        """
        if cand.target not in self.uncovered:
            raise AlgorithmInvariantError(f"Target node {cand.target} is not uncovered")
        if not 0 <= cand.source < self.n:
            raise AlgorithmInvariantError(f"Unknown source node {cand.source}")
        if not same_position(self.positions[cand.target], cand.target_position):
            raise AlgorithmInvariantError(f"Target node {cand.target} is not at {cand.target_position}")
        if not same_position(self.positions[cand.source], cand.source_position):
            raise AlgorithmInvariantError(f"Source node {cand.source} is not at {cand.source_position}")

        if cand.kind is SourceKind.EXTEND_TRANSMITTER:
            t = self.transmitting.get(cand.source)
            if t is None:
                raise AlgorithmInvariantError(f"Node {cand.source} is not transmitting")
            t.power += cand.cost
        else:
            if cand.source not in self.relays:
                raise AlgorithmInvariantError(f"Node {cand.source} is not a relay")
            position = self.relays.pop(cand.source)
            self.transmitting[cand.source] = Transmitter(cand.source, position, cand.cost)

        target_pos = self.uncovered.pop(cand.target)
        self.relays[cand.target] = target_pos

        return TransmissionStep(
            source=self.positions[cand.source],
            power_delta=cand.cost,
            source_node=cand.source,
            target_node=cand.target,
            target=target_pos,
            kind=cand.kind,
        )

    def check_invariants(self) -> None:
        """Raises AlgorithmInvariantError if the three groups are not a partition of the nodes."""
        t = set(self.transmitting)
        r = set(self.relays)
        u = set(self.uncovered)
        if t & r or t & u or r & u:
            raise AlgorithmInvariantError("Node groups are not disjoint")
        if len(t) + len(r) + len(u) != self.n or (t | r | u) != set(range(self.n)):
            raise AlgorithmInvariantError(
                f"Node groups cover {len(t | r | u)} of {self.n} nodes"
            )
        if 0 not in t:
            raise AlgorithmInvariantError("The source stopped transmitting")

    def snapshot(self, round_no: int) -> RoundSnapshot:
        return RoundSnapshot(
            round=round_no,
            transmitters=tuple(t.copy() for t in self.transmitting.values()),
            uncovered=tuple(self.uncovered.values()),
        )

