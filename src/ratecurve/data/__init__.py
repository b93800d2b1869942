"""
Data package - market quote ingestion.
"""

from .loader import read_quotes, instruments_from_frame, load_instruments

__all__ = [
    "read_quotes",
    "instruments_from_frame",
    "load_instruments",
]
