"""SQLAlchemy Listing Repository Implementation

Read-only listing access used as the invoice ListingSnapshotSource.
"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.listing_snapshot_source import ListingSnapshot, ListingSnapshotSource
from src.domain.listing import Listing


class SqlAlchemyListingRepository(ListingSnapshotSource):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_snapshot(self, listing_id: int) -> Optional[ListingSnapshot]:
        statement = select(Listing).where(Listing.id == listing_id)
        result = await self.session.execute(statement)
        listing = result.scalar_one_or_none()
        if listing is None:
            return None
        return ListingSnapshot(
            listing_id=listing.id,
            title=listing.title,
            price=listing.price,
            category=listing.category,
        )
