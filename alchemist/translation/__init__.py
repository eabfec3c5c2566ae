from alchemist.translation.engine import TranslationEngine
from alchemist.translation.models import UnitFailure, UnitOutcome, UnitSuccess

__all__ = ["TranslationEngine", "UnitFailure", "UnitOutcome", "UnitSuccess"]
