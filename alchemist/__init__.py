"""Data Alchemist: turn documents into spreadsheets and word-processor files."""

__version__ = "0.1.0"
