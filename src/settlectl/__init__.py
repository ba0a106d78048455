"""settlectl — ledger and settlement engine for client/contractor job payments."""

__version__ = "0.1.0"
