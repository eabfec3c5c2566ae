class TabularCodecError(Exception):
    """Raised when spreadsheet bytes cannot be decoded or encoded."""
