from abc import ABC, abstractmethod
from collections.abc import Mapping

from alchemist.results.models import Matrix


class BaseTabularCodec(ABC):
    """Contract for spreadsheet container codecs."""

    @abstractmethod
    def decode(self, data: bytes) -> dict[str, Matrix]:
        """Read spreadsheet bytes into sheet name -> row-major cell strings.

        Sheet order and cell content are preserved verbatim.

        Raises:
            TabularCodecError: if the bytes cannot be read as a workbook.
        """

    @abstractmethod
    def encode(self, units: Mapping[str, Matrix]) -> bytes:
        """Write one sheet per unit, in mapping order. Ragged rows are allowed.

        Raises:
            TabularCodecError: if the workbook cannot be built.
        """
