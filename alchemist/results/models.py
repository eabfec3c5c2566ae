from dataclasses import dataclass, field
from enum import Enum

Matrix = list[list[str]]

EXTRACTED_UNIT_NAME = "Extracted Data"

SUPPORTED_LANGUAGES: tuple[str, ...] = ("English", "Vietnamese", "Chinese")

_NO_TRANSLATION_VALUES = frozenset({"", "none"})


class ExtractionMode(str, Enum):
    """Which branch of the result model an operation fills."""

    TABULAR = "tabular"
    TEXT = "text"


@dataclass(frozen=True)
class NoResult:
    """Nothing extracted yet (or the last result was discarded)."""

    type: str = "none"


@dataclass(frozen=True)
class TabularResult:
    """Ordered mapping of unit name to a row-major matrix of cell strings."""

    type: str = "tabular"
    units: dict[str, Matrix] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.units


@dataclass(frozen=True)
class TextResult:
    """One layout-preserving block of text."""

    type: str = "text"
    text: str = ""


ResultModel = NoResult | TabularResult | TextResult


def normalize_target(target: str | None) -> str | None:
    """Return the target language, or None when the source language is kept.

    Accepts None, an empty string or the literal "none" (any case) as
    "no translation".
    """
    if target is None:
        return None
    cleaned = target.strip()
    if cleaned.lower() in _NO_TRANSLATION_VALUES:
        return None
    return cleaned


def mode_of(result: ResultModel) -> ExtractionMode | None:
    if isinstance(result, TabularResult):
        return ExtractionMode.TABULAR
    if isinstance(result, TextResult):
        return ExtractionMode.TEXT
    return None
