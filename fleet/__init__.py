"""Fleet - Solana program deployment and upgrade workflows."""

__version__ = "0.1.0"
