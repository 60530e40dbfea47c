"""
Customer model. Owns cloud providers.
"""

from sqlalchemy import Column, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from topology.db.base import Base


class Customer(Base):
    """Customer model."""
    
    __tablename__ = "customers"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    
    # Relationships
    providers = relationship("Provider", back_populates="customer")
