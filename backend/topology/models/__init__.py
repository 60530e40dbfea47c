"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from topology.models.customer import Customer
from topology.models.provider import Provider
from topology.models.region import Region
from topology.models.availability_zone import AvailabilityZone

__all__ = [
    "Customer",
    "Provider",
    "Region",
    "AvailabilityZone",
]
