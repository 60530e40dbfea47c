"""
Region repository: RegionStore backed by async SQLAlchemy.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from topology.core.exceptions import DataIntegrityError
from topology.core.logging import get_logger
from topology.db.repositories.availability_zone_repository import AvailabilityZoneRepository
from topology.db.repositories.base_repository import BaseRepository
from topology.db.repositories.region_store import RegionStore
from topology.models.availability_zone import AvailabilityZone
from topology.models.provider import Provider
from topology.models.region import Region
from topology.schemas.region import ProviderSummary, RegionRecord, RegionSummary, ZoneRecord

logger = get_logger(__name__)

# Columns written by save(); id is only set on insert
_REGION_FIELDS = (
    "code",
    "name",
    "image_reference",
    "latitude",
    "longitude",
    "provider_id",
    "active",
    "details",
    "config",
)


def _to_record(region: Region) -> RegionRecord:
    """Convert a loaded Region row into a RegionRecord."""
    return RegionRecord(
        id=region.id,
        code=region.code,
        name=region.name,
        image_reference=region.image_reference,
        latitude=region.latitude if region.latitude is not None else 0.0,
        longitude=region.longitude if region.longitude is not None else 0.0,
        provider_id=region.provider_id,
        provider=ProviderSummary.model_validate(region.provider) if region.provider else None,
        zone_ids=[zone.id for zone in region.zones],
        active=region.active,
        details=dict(region.details) if region.details is not None else None,
        config=dict(region.config) if region.config is not None else None,
    )


class RegionRepository(BaseRepository[Region], RegionStore):
    """Repository for region operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(Region, session)
        self.zone_repo = AvailabilityZoneRepository(session)
    
    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        try:
            yield
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
    
    def _base_query(self):
        return (
            select(Region)
            .options(
                selectinload(Region.provider),
                selectinload(Region.zones),
            )
            .execution_options(populate_existing=True)
        )
    
    async def get(self, region_id: UUID) -> Optional[RegionRecord]:
        """Get region by ID with provider and zones eager loaded."""
        result = await self.session.execute(
            self._base_query().where(Region.id == region_id)
        )
        region = result.scalar_one_or_none()
        return _to_record(region) if region else None
    
    async def get_by_code(self, provider_id: UUID, code: str) -> Optional[RegionRecord]:
        """Get a provider's region by code."""
        result = await self.session.execute(
            self._base_query().where(
                Region.provider_id == provider_id,
                Region.code == code,
            )
        )
        regions = list(result.scalars().all())
        if len(regions) > 1:
            logger.error(
                "Duplicate region code for provider",
                extra={"provider_id": str(provider_id), "code": code, "matches": len(regions)},
            )
            raise DataIntegrityError(
                f"Found {len(regions)} regions with code '{code}' for provider {provider_id}",
                details={"provider_id": str(provider_id), "code": code},
            )
        return _to_record(regions[0]) if regions else None
    
    async def get_by_provider(self, provider_id: UUID) -> List[RegionRecord]:
        """List all regions of a provider."""
        result = await self.session.execute(
            self._base_query().where(Region.provider_id == provider_id)
        )
        return [_to_record(region) for region in result.scalars().all()]
    
    async def get_owned(
        self,
        customer_id: UUID,
        provider_id: UUID,
        region_id: UUID,
    ) -> Optional[RegionSummary]:
        """Get region summary if it belongs to the provider and the provider to the customer."""
        query = (
            select(Region.id, Region.code, Region.name)
            .join(Provider, Provider.id == Region.provider_id)
            .where(
                Region.id == region_id,
                Provider.id == provider_id,
                Provider.customer_id == customer_id,
            )
        )
        result = await self.session.execute(query)
        row = result.one_or_none()
        if row is None:
            return None
        return RegionSummary(id=row.id, code=row.code, name=row.name)
    
    async def fetch_valid_regions(
        self,
        customer_id: UUID,
        provider_id: UUID,
        min_zone_count: int,
    ) -> List[RegionSummary]:
        """List regions of the customer's provider with at least min_zone_count zones."""
        query = (
            select(Region.id, Region.code, Region.name)
            .join(Provider, Provider.id == Region.provider_id)
            .outerjoin(AvailabilityZone, AvailabilityZone.region_id == Region.id)
            .where(
                Provider.id == provider_id,
                Provider.customer_id == customer_id,
            )
            .group_by(Region.id, Region.code, Region.name)
            .having(func.count(AvailabilityZone.id) >= min_zone_count)
        )
        result = await self.session.execute(query)
        return [RegionSummary(id=row.id, code=row.code, name=row.name) for row in result.all()]
    
    async def save(self, record: RegionRecord) -> RegionRecord:
        """Insert the region or update the stored row."""
        values = record.model_dump(include=set(_REGION_FIELDS))
        region = await self.session.get(Region, record.id)
        if region is None:
            region = Region(id=record.id, **values)
            self.session.add(region)
        else:
            for field, value in values.items():
                setattr(region, field, value)
        await self.session.flush()
        return record

    async def update(self, record: RegionRecord) -> bool:
        """Update the stored row; never inserts."""
        region = await self.session.get(Region, record.id)
        if region is None:
            return False
        for field, value in record.model_dump(include=set(_REGION_FIELDS)).items():
            setattr(region, field, value)
        await self.session.flush()
        return True

    async def add_zone(
        self,
        region_id: UUID,
        code: str,
        name: str,
        subnet: Optional[str] = None,
    ) -> ZoneRecord:
        zone = await self.zone_repo.create(
            region_id=region_id,
            code=code,
            name=name,
            subnet=subnet,
            active=True,
        )
        return ZoneRecord.model_validate(zone)
    
    async def list_zones(self, region_id: UUID) -> List[ZoneRecord]:
        zones = await self.zone_repo.list_by_region(region_id)
        return [ZoneRecord.model_validate(zone) for zone in zones]
    
    async def deactivate_zones(self, region_id: UUID) -> int:
        return await self.zone_repo.deactivate_for_region(region_id)
