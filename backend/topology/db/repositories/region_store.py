"""
RegionStore: the persistence interface region operations rely on.
"""

from abc import ABC, abstractmethod
from typing import AsyncContextManager, List, Optional
from uuid import UUID

from topology.schemas.region import RegionRecord, RegionSummary, ZoneRecord


class RegionStore(ABC):
    """
    Transactional read/write access to regions and their zones.
    
    Writes take effect when the enclosing transaction() commits. A
    transaction rolls back and re-raises on any exception raised inside it.
    """
    
    @abstractmethod
    def transaction(self) -> AsyncContextManager[None]:
        """Scope in which writes commit together or not at all."""
    
    @abstractmethod
    async def get(self, region_id: UUID) -> Optional[RegionRecord]:
        """Region by id with its provider resolved, or None."""
    
    @abstractmethod
    async def get_by_code(self, provider_id: UUID, code: str) -> Optional[RegionRecord]:
        """
        Region of a provider by code, or None.
        Raises DataIntegrityError when more than one region matches.
        """
    
    @abstractmethod
    async def get_by_provider(self, provider_id: UUID) -> List[RegionRecord]:
        """All regions of a provider, active and inactive."""
    
    @abstractmethod
    async def get_owned(
        self,
        customer_id: UUID,
        provider_id: UUID,
        region_id: UUID,
    ) -> Optional[RegionSummary]:
        """Region if it belongs to the provider and the provider to the customer."""
    
    @abstractmethod
    async def fetch_valid_regions(
        self,
        customer_id: UUID,
        provider_id: UUID,
        min_zone_count: int,
    ) -> List[RegionSummary]:
        """Regions of the customer's provider owning at least min_zone_count zones."""
    
    @abstractmethod
    async def save(self, record: RegionRecord) -> RegionRecord:
        """Insert or update a region."""
    
    @abstractmethod
    async def update(self, record: RegionRecord) -> bool:
        """Update a stored region; returns False, writing nothing, when it does not exist."""
    
    @abstractmethod
    async def add_zone(
        self,
        region_id: UUID,
        code: str,
        name: str,
        subnet: Optional[str] = None,
    ) -> ZoneRecord:
        """Create an active zone owned by the region."""
    
    @abstractmethod
    async def list_zones(self, region_id: UUID) -> List[ZoneRecord]:
        """Zones owned by the region."""
    
    @abstractmethod
    async def deactivate_zones(self, region_id: UUID) -> int:
        """Set active=False on every zone of the region; returns the row count."""
