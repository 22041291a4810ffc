from __future__ import annotations

import csv
import logging
import math
from typing import List, Sequence

from .errors import InputFormatError
from .geometry import Point
from .partition import TransmissionStep

logger = logging.getLogger(__name__)

PATH_FIELDS = ["stage", "x", "y", "power_increase", "kind", "target_x", "target_y"]


def parse_node_line(line: str, lineno: int = 0, path: str = "") -> Point:
    """
    Parses one "(x,y)" line: the enclosing characters are dropped, then the
    text is split on the first comma. Both coordinates must be finite.
    """
    text = line.strip()
    if len(text) < 2:
        raise InputFormatError(line, lineno, path, "too short")
    body = text[1:-1]
    if "," not in body:
        raise InputFormatError(line, lineno, path, "missing comma")
    xs, ys = body.split(",", 1)
    try:
        x, y = float(xs), float(ys)
    except ValueError:
        raise InputFormatError(line, lineno, path, "non-numeric coordinate") from None
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InputFormatError(line, lineno, path, "coordinate is not finite")
    return x, y


def load_nodes(path: str) -> List[Point]:
    """
    Reads a locations file, one node per line. The first node is the source.
    An unreadable file gives an empty list; a line that is not UTF-8 is a
    format error.
    """
    pts: List[Point] = []
    try:
        with open(path, "rb") as f:
            for lineno, raw in enumerate(f, start=1):
                try:
                    line = raw.decode("utf-8")
                except UnicodeDecodeError:
                    bad = raw.decode("utf-8", errors="replace")
                    raise InputFormatError(bad, lineno, path, "not valid UTF-8") from None
                if not line.strip():
                    continue
                pts.append(parse_node_line(line, lineno, path))
    except OSError as e:
        logger.warning("Could not read locations file '%s': %s", path, e)
        return []
    logger.info("Loaded %d node(s) from %s", len(pts), path)
    return pts


def write_path_csv(path: Sequence[TransmissionStep], csv_out: str) -> None:
    with open(csv_out, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=PATH_FIELDS)
        w.writeheader()
        for i, step in enumerate(path, start=1):
            w.writerow({
                "stage": i,
                "x": step.source[0],
                "y": step.source[1],
                "power_increase": step.power_delta,
                "kind": step.kind.value,
                "target_x": step.target[0],
                "target_y": step.target[1],
            })
    logger.info("Wrote %d stage(s) to %s", len(path), csv_out)
