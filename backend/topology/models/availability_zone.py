"""
Availability zone model. Owned exclusively by its region.
"""

from sqlalchemy import Column, String, Boolean, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from topology.db.base import Base


class AvailabilityZone(Base):
    """Availability zone model."""
    
    __tablename__ = "availability_zones"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    region_id = Column(
        UUID(as_uuid=True),
        ForeignKey("regions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    code = Column(String(25), nullable=False)
    name = Column(String(100), nullable=False)
    subnet = Column(String(100), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    
    # Relationships
    region = relationship("Region", back_populates="zones")
