from alchemist.tabular.base import BaseTabularCodec
from alchemist.tabular.openpyxl_adapter import OpenpyxlCodec

__all__ = ["BaseTabularCodec", "OpenpyxlCodec"]
