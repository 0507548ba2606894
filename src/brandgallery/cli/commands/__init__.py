"""CLI commands package."""

from . import (
    ingest,
    inspect,
)

__all__ = [
    'ingest',
    'inspect',
]
