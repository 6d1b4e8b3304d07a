"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .store_hours_service import StoreDataSourceProtocol, StoreHoursService

__all__ = ["StoreDataSourceProtocol", "StoreHoursService"]
