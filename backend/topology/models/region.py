"""
Region model: a geographic deployment area of a cloud provider.
"""

from sqlalchemy import Column, String, Float, Boolean, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from topology.db.base import Base


class Region(Base):
    """Region model. Soft-deleted through the active flag."""
    
    __tablename__ = "regions"
    __table_args__ = (
        UniqueConstraint("provider_id", "code", name="uq_regions_provider_code"),
    )
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String(25), nullable=False)  # e.g., "us-west-2"
    name = Column(String(100), nullable=False)
    image_reference = Column(String(255), nullable=False)  # base machine image for provisioning
    latitude = Column(Float, nullable=True, default=0.0)
    longitude = Column(Float, nullable=True, default=0.0)
    provider_id = Column(UUID(as_uuid=True), ForeignKey("providers.id"), nullable=False, index=True)
    active = Column(Boolean, nullable=False, default=True)
    details = Column(JSON, nullable=True)
    config = Column(JSON, nullable=True)
    
    # Relationships
    provider = relationship("Provider", back_populates="regions")
    zones = relationship(
        "AvailabilityZone",
        back_populates="region",
        cascade="all, delete-orphan",
    )
