"""
Adapters layer - Store data sources (REST API and local JSON files).
"""

from .json_store_source import JsonStoreSource
from .store_api_client import StoreApiClient

__all__ = ["JsonStoreSource", "StoreApiClient"]
