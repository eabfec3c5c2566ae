from dataclasses import dataclass

from alchemist.results.models import Matrix


@dataclass(frozen=True)
class UnitSuccess:
    """A unit whose translation came back well-formed."""

    name: str
    matrix: Matrix
    status: str = "success"


@dataclass(frozen=True)
class UnitFailure:
    """A unit whose translation request failed or returned a malformed payload."""

    name: str
    cause: BaseException
    status: str = "failure"


UnitOutcome = UnitSuccess | UnitFailure
