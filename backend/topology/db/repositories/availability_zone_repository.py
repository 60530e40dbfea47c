"""
Availability zone repository for database operations.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from topology.db.repositories.base_repository import BaseRepository
from topology.models.availability_zone import AvailabilityZone


class AvailabilityZoneRepository(BaseRepository[AvailabilityZone]):
    """Repository for availability zone operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(AvailabilityZone, session)
    
    async def list_by_region(self, region_id: UUID) -> List[AvailabilityZone]:
        """List zones of a region, reloading any already in the session."""
        query = (
            select(AvailabilityZone)
            .where(AvailabilityZone.region_id == region_id)
            .order_by(AvailabilityZone.code)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
    
    async def deactivate_for_region(self, region_id: UUID) -> int:
        """Flip every zone of the region to inactive in a single UPDATE."""
        result = await self.session.execute(
            update(AvailabilityZone)
            .where(AvailabilityZone.region_id == region_id)
            .values(active=False)
        )
        await self.session.flush()
        return result.rowcount
