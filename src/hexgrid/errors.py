from __future__ import annotations


class HexGridError(Exception):
    """Base class for hex grid errors."""
    pass


class InvalidDirectionError(HexGridError):
    """Direction is not valid under the given orientation."""

    def __init__(self, message: str, direction: str | None = None, orientation: str | None = None):
        self.message = message
        self.direction = direction
        self.orientation = orientation
        super().__init__(message)


class DuplicateHexError(HexGridError):
    """A hex already exists at the given axial coordinates."""

    def __init__(self, q: int, r: int):
        self.q = q
        self.r = r
        self.message = f"A hex at {q},{r} already exists."
        super().__init__(self.message)


class InvalidLabelError(HexGridError):
    """Algebraic cell label could not be parsed."""

    def __init__(self, message: str, label: str):
        self.message = message
        self.label = label
        super().__init__(message)


class HexNotFoundError(HexGridError):
    """No hex on the board matches the requested coordinates."""
    pass
