from __future__ import annotations


class BipError(Exception):
    pass


class InputFormatError(BipError):
    """A line of the locations file is not a `(x,y)` pair."""

    def __init__(self, line: str, lineno: int = 0, path: str = "", reason: str = ""):
        self.line = line
        self.lineno = lineno
        self.path = path
        self.reason = reason
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f"{self.path}:{self.lineno}" if self.path else f"line {self.lineno}"
        msg = f"Malformed node at {where}: {self.line!r}"
        if self.reason:
            msg += f" ({self.reason})"
        return msg


class MissingSourceError(BipError):
    __str__ = lambda z: "No node found: the broadcast source is missing."


class AlgorithmInvariantError(BipError):
    pass
