"""
In-memory RegionStore.
Keeps regions, zones and provider ownership in dicts; transactions snapshot and restore them.
"""

import copy
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional
from uuid import UUID

from topology.core.exceptions import DataIntegrityError
from topology.db.repositories.region_store import RegionStore
from topology.schemas.region import ProviderSummary, RegionRecord, RegionSummary, ZoneRecord


class InMemoryRegionStore(RegionStore):
    """
    RegionStore over plain dicts.

    Writes go straight to the dicts; transaction() copies the dicts on entry
    and puts the copies back if the block raises. Set fail_on_deactivate_zones
    to make deactivate_zones raise, for exercising rollback.
    """

    def __init__(self):
        self.providers: Dict[UUID, ProviderSummary] = {}
        self.regions: Dict[UUID, RegionRecord] = {}
        self.zones: Dict[UUID, ZoneRecord] = {}
        self.fail_on_deactivate_zones = False
        self.commits = 0
        self.rollbacks = 0

    def add_provider(self, provider: ProviderSummary) -> ProviderSummary:
        self.providers[provider.id] = provider
        return provider

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        snapshot = (copy.deepcopy(self.regions), copy.deepcopy(self.zones))
        try:
            yield
            self.commits += 1
        except Exception:
            self.regions, self.zones = snapshot
            self.rollbacks += 1
            raise

    def _load(self, record: RegionRecord) -> RegionRecord:
        loaded = record.model_copy(deep=True)
        loaded.provider = self.providers.get(record.provider_id)
        loaded.zone_ids = [zone.id for zone in self.zones.values() if zone.region_id == record.id]
        return loaded

    def _owned_by(self, customer_id: UUID, provider_id: UUID) -> bool:
        provider = self.providers.get(provider_id)
        return provider is not None and provider.customer_id == customer_id

    async def get(self, region_id: UUID) -> Optional[RegionRecord]:
        record = self.regions.get(region_id)
        return self._load(record) if record is not None else None

    async def get_by_code(self, provider_id: UUID, code: str) -> Optional[RegionRecord]:
        matches = [
            record for record in self.regions.values()
            if record.provider_id == provider_id and record.code == code
        ]
        if len(matches) > 1:
            raise DataIntegrityError(
                f"Found {len(matches)} regions with code '{code}' for provider {provider_id}",
                details={"provider_id": str(provider_id), "code": code},
            )
        return self._load(matches[0]) if matches else None

    async def get_by_provider(self, provider_id: UUID) -> List[RegionRecord]:
        return [
            self._load(record) for record in self.regions.values()
            if record.provider_id == provider_id
        ]

    async def get_owned(
        self,
        customer_id: UUID,
        provider_id: UUID,
        region_id: UUID,
    ) -> Optional[RegionSummary]:
        record = self.regions.get(region_id)
        if record is None or record.provider_id != provider_id:
            return None
        if not self._owned_by(customer_id, provider_id):
            return None
        return record.summary()

    async def fetch_valid_regions(
        self,
        customer_id: UUID,
        provider_id: UUID,
        min_zone_count: int,
    ) -> List[RegionSummary]:
        if not self._owned_by(customer_id, provider_id):
            return []
        zone_counts: Dict[UUID, int] = {}
        for zone in self.zones.values():
            zone_counts[zone.region_id] = zone_counts.get(zone.region_id, 0) + 1
        return [
            record.summary() for record in self.regions.values()
            if record.provider_id == provider_id
            and zone_counts.get(record.id, 0) >= min_zone_count
        ]

    async def save(self, record: RegionRecord) -> RegionRecord:
        stored = record.model_copy(deep=True)
        stored.provider = None
        stored.zone_ids = []
        self.regions[record.id] = stored
        return record

    async def update(self, record: RegionRecord) -> bool:
        if record.id not in self.regions:
            return False
        await self.save(record)
        return True

    async def add_zone(
        self,
        region_id: UUID,
        code: str,
        name: str,
        subnet: Optional[str] = None,
    ) -> ZoneRecord:
        zone = ZoneRecord(region_id=region_id, code=code, name=name, subnet=subnet)
        self.zones[zone.id] = zone
        return zone.model_copy()

    async def list_zones(self, region_id: UUID) -> List[ZoneRecord]:
        zones = [zone for zone in self.zones.values() if zone.region_id == region_id]
        return [zone.model_copy() for zone in sorted(zones, key=lambda zone: zone.code)]

    async def deactivate_zones(self, region_id: UUID) -> int:
        if self.fail_on_deactivate_zones:
            raise RuntimeError("simulated store failure during zone update")
        updated = 0
        for zone in self.zones.values():
            if zone.region_id == region_id:
                zone.active = False
                updated += 1
        return updated
