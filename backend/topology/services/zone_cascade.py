"""
Cascading deactivation of a region and every zone it owns.
"""

from topology.core.exceptions import NotFoundError, OperationalFailure
from topology.core.logging import get_logger
from topology.db.repositories.region_store import RegionStore
from topology.schemas.region import RegionRecord

logger = get_logger(__name__)


class ZoneCascadeCoordinator:
    """Flips a region and all of its zones to inactive in one store transaction."""
    
    def __init__(self, store: RegionStore):
        self.store = store
    
    async def disable_region_and_zones(self, region: RegionRecord) -> RegionRecord:
        """
        Deactivate the region and its zones atomically.
        
        Either both the region and all its zones end up inactive or nothing
        changes. On failure the in-memory record's active flag is restored and
        OperationalFailure is raised; the call is not retried. A region the
        store does not hold is a failure too, nothing is inserted.
        """
        was_active = region.active
        try:
            async with self.store.transaction():
                region.set_active_flag(False)
                if not await self.store.update(region):
                    raise NotFoundError(
                        f"Region {region.id} not found",
                        details={"region_id": str(region.id)},
                    )
                zones_updated = await self.store.deactivate_zones(region.id)
        except Exception as e:
            region.set_active_flag(was_active)
            logger.error(
                "Unable to flag region as deleted",
                extra={"region_id": str(region.id)},
                exc_info=True,
            )
            raise OperationalFailure(
                f"Unable to flag Region UUID as deleted: {region.id}",
                details={"region_id": str(region.id)},
            ) from e
        
        logger.info(
            "Region and zones deactivated",
            extra={"region_id": str(region.id), "zones_updated": zones_updated},
        )
        return region
