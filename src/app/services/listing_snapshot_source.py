"""Listing Snapshot Source Interface

Read-only access to the listing data copied into a new invoice.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel


class ListingSnapshot(BaseModel):
    listing_id: int
    title: str
    price: Decimal
    category: str


class ListingSnapshotSource(ABC):

    @abstractmethod
    async def get_snapshot(self, listing_id: int) -> Optional[ListingSnapshot]:
        """Return the listing's current title/price/category, or None"""
        pass
