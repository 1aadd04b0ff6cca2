"""Exceptions raised while evaluating and exporting carbon footprints.

Each validation error also derives from the built-in exception that callers
would otherwise expect (``ValueError``, ``TypeError``, ``KeyError``), so code
catching the built-ins keeps working.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class CarbonEvalError(Exception):
    """Base class for all carbon_eval errors."""


class EvaluationError(CarbonEvalError, ValueError):
    """An input pair could not be evaluated."""


class MalformedInputError(EvaluationError):
    pass


class InvalidCategoryType(EvaluationError, TypeError):
    def __init__(self, value: object, position: int) -> None:
        self.value = value
        self.position = position
        super().__init__(
            f"Energy source at position {position} must be a non-empty string, "
            f"got {value!r}."
        )


class UnknownCategory(EvaluationError, KeyError):
    def __init__(self, category: str, valid_options: Iterable[str]) -> None:
        self.category = category
        self.valid_options = tuple(valid_options)
        super().__init__(
            f'"{category}" is not a recognized energy source. '
            f"Valid options are: {', '.join(self.valid_options)}"
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class InvalidQuantity(EvaluationError):
    def __init__(self, category: str, value: object) -> None:
        self.category = category
        self.value = value
        super().__init__(
            f"Consumption for '{category}' must be a non-negative real number, got {value!r}."
        )


class ExportWriteFailure(CarbonEvalError, OSError):
    def __init__(self, destination: Path, reason: object) -> None:
        self.destination = Path(destination)
        super().__init__(f"Could not write {self.destination}: {reason}")
