"""
Cloud provider model.
"""

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from topology.db.base import Base


class Provider(Base):
    """Cloud provider account owned by a customer."""
    
    __tablename__ = "providers"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False, index=True)
    code = Column(String(50), nullable=False)  # e.g., "aws", "gcp", "onprem"
    name = Column(String(100), nullable=False)
    
    # Relationships
    customer = relationship("Customer", back_populates="providers")
    regions = relationship("Region", back_populates="provider")
