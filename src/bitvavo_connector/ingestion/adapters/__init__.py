"""
Exchange adapters package.
Exports the BaseAdapter contract and the Bitvavo plugin adapter.
"""

from bitvavo_connector.ingestion.adapters.base import BaseAdapter
from bitvavo_connector.ingestion.adapters.bitvavo_plugin.adapter import (
    BitvavoAdapter,
)

__all__ = [
    "BaseAdapter",
    "BitvavoAdapter",
]
