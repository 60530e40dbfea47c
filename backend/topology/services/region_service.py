"""
Region service with business logic.
Mutates RegionRecords in memory and persists them explicitly through a RegionStore.
"""

from typing import Any, Callable, List, Mapping, Optional
from uuid import UUID

from topology.core.exceptions import NotFoundError
from topology.core.logging import get_logger
from topology.db.repositories.region_store import RegionStore
from topology.schemas.region import RegionRecord, RegionSummary, ZoneRecord
from topology.services.base_service import BaseService
from topology.services.zone_cascade import ZoneCascadeCoordinator

logger = get_logger(__name__)


class RegionService(BaseService):
    """Service for region operations."""
    
    def __init__(self, store: RegionStore):
        self.store = store
        self.cascade = ZoneCascadeCoordinator(store)
    
    async def _persist(self, region: RegionRecord) -> RegionRecord:
        async with self.store.transaction():
            await self.store.save(region)
        return region
    
    async def _apply(self, region: RegionRecord, change: Callable[[RegionRecord], None]) -> RegionRecord:
        """
        Apply change to the record and write it to the store.
        
        If the write fails the store rolls back and the record gets its
        previous field values back, so the caller never holds unsaved state.
        """
        snapshot = region.model_copy(deep=True)
        change(region)
        try:
            async with self.store.transaction():
                if not await self.store.update(region):
                    raise NotFoundError(
                        f"Region {region.id} not found",
                        details={"region_id": str(region.id)},
                    )
        except Exception:
            for field in RegionRecord.model_fields:
                setattr(region, field, getattr(snapshot, field))
            logger.error(
                "Region update failed, record restored",
                extra={"region_id": str(region.id)},
                exc_info=True,
            )
            raise
        return region
    
    async def create_region(
        self,
        provider_id: UUID,
        code: str,
        name: str,
        image_reference: str,
        latitude: float = 0.0,
        longitude: float = 0.0,
    ) -> RegionRecord:
        """Create and persist a new region."""
        region = RegionRecord.create(provider_id, code, name, image_reference, latitude, longitude)
        await self._persist(region)
        logger.info(
            "Region created",
            extra={"region_id": str(region.id), "provider_id": str(provider_id), "code": code},
        )
        return region
    
    async def create_region_with_metadata(
        self,
        provider_id: UUID,
        code: str,
        metadata: Mapping[str, Any],
    ) -> RegionRecord:
        """Create and persist a region described by provider metadata."""
        region = RegionRecord.from_metadata(provider_id, code, metadata)
        await self._persist(region)
        logger.info(
            "Region created from metadata",
            extra={"region_id": str(region.id), "provider_id": str(provider_id), "code": code},
        )
        return region
    
    async def get_region(self, region_id: UUID) -> Optional[RegionRecord]:
        return await self.store.get(region_id)
    
    async def require_region(self, region_id: UUID) -> RegionRecord:
        """Get region by ID, raising NotFoundError when absent."""
        region = await self.store.get(region_id)
        if region is None:
            raise NotFoundError(
                f"Region {region_id} not found",
                details={"region_id": str(region_id)},
            )
        return region
    
    async def get_region_by_code(self, provider_id: UUID, code: str) -> Optional[RegionRecord]:
        return await self.store.get_by_code(provider_id, code)
    
    async def list_regions(self, provider_id: UUID) -> List[RegionRecord]:
        return await self.store.get_by_provider(provider_id)
    
    async def get_owned_region(
        self,
        customer_id: UUID,
        provider_id: UUID,
        region_id: UUID,
    ) -> Optional[RegionSummary]:
        """Region summary if the customer owns the provider that owns the region."""
        return await self.store.get_owned(customer_id, provider_id, region_id)
    
    async def fetch_valid_regions(
        self,
        customer_id: UUID,
        provider_id: UUID,
        min_zone_count: int,
    ) -> List[RegionSummary]:
        """Regions usable for provisioning: at least min_zone_count zones."""
        return await self.store.fetch_valid_regions(customer_id, provider_id, min_zone_count)
    
    async def update_coordinates(self, region: RegionRecord, latitude: float, longitude: float) -> RegionRecord:
        # Validation raises before anything is written
        return await self._apply(region, lambda record: record.set_coordinates(latitude, longitude))
    
    async def update_security_group_id(self, region: RegionRecord, security_group_id: str) -> RegionRecord:
        return await self._apply(region, lambda record: record.set_security_group_id(security_group_id))
    
    async def update_config(self, region: RegionRecord, config: Mapping[str, str]) -> RegionRecord:
        """Merge config into the region's config and persist; last write wins."""
        return await self._apply(region, lambda record: record.set_config(config))
    
    async def set_active_flag(self, region: RegionRecord, active: bool) -> RegionRecord:
        """Set the region's flag only; zones are left as they are."""
        return await self._apply(region, lambda record: record.set_active_flag(active))
    
    async def add_zone(
        self,
        region: RegionRecord,
        code: str,
        name: str,
        subnet: Optional[str] = None,
    ) -> ZoneRecord:
        async with self.store.transaction():
            zone = await self.store.add_zone(region.id, code, name, subnet)
        region.zone_ids.append(zone.id)
        return zone
    
    async def list_zones(self, region_id: UUID) -> List[ZoneRecord]:
        return await self.store.list_zones(region_id)
    
    async def disable_region_and_zones(self, region: RegionRecord) -> RegionRecord:
        return await self.cascade.disable_region_and_zones(region)
