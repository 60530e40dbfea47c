"""
Region Pydantic schemas.
RegionRecord is the plain data structure for a region; persistence goes through a RegionStore.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID, uuid4

from topology.core.exceptions import InvalidArgumentError
from topology.utils.config_masking import MaskingPolicy, mask_config

SECURITY_GROUP_KEY = "sg_id"


def coerce_coordinate(name: str, value: Any) -> float:
    """Convert a coordinate to float; a missing value reads as 0.0."""
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(
            f"Invalid {name.capitalize()} Value, it should be a number",
            details={name: value},
        )


def validate_coordinates(latitude: float, longitude: float) -> None:
    """Raise InvalidArgumentError unless both values are in range; NaN is out of range."""
    if not (-90 <= latitude <= 90):
        raise InvalidArgumentError(
            "Invalid Latitude Value, it should be between -90 to 90",
            details={"latitude": latitude},
        )
    if not (-180 <= longitude <= 180):
        raise InvalidArgumentError(
            "Invalid Longitude Value, it should be between -180 to 180",
            details={"longitude": longitude},
        )


class ProviderSummary(BaseModel):
    """Owning provider, resolved alongside a region."""
    id: UUID
    customer_id: UUID
    code: str
    name: str
    
    class Config:
        from_attributes = True


class RegionSummary(BaseModel):
    """Minimal identity projection returned by scoped queries."""
    id: UUID
    code: str
    name: str
    
    class Config:
        from_attributes = True


class ZoneRecord(BaseModel):
    """Availability zone owned by a region."""
    id: UUID = Field(default_factory=uuid4)
    region_id: UUID
    code: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1, max_length=100)
    subnet: Optional[str] = None
    active: bool = True
    
    class Config:
        from_attributes = True


class RegionRecord(BaseModel):
    """
    A region of a cloud provider.
    
    Setters only change the in-memory record. Callers persist the result
    explicitly through a RegionStore, which is what RegionService does.
    Coordinates are range-checked on construction as well.
    """
    id: UUID = Field(default_factory=uuid4)
    code: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1, max_length=100)
    image_reference: str = Field(..., min_length=1)
    latitude: float = 0.0
    longitude: float = 0.0
    provider_id: UUID
    provider: Optional[ProviderSummary] = None
    zone_ids: List[UUID] = Field(default_factory=list)
    active: bool = True
    details: Optional[Dict[str, Any]] = None
    config: Optional[Dict[str, str]] = None
    
    class Config:
        from_attributes = True
    
    @model_validator(mode='before')
    def default_missing_coordinates(cls, data):
        """Nullable coordinate columns load as 0.0."""
        if isinstance(data, dict):
            for key in ("latitude", "longitude"):
                if key in data and data[key] is None:
                    data[key] = 0.0
        return data
    
    @model_validator(mode='after')
    def check_coordinates(self):
        validate_coordinates(self.latitude, self.longitude)
        return self
    
    @classmethod
    def create(
        cls,
        provider_id: UUID,
        code: str,
        name: str,
        image_reference: str,
        latitude: float = 0.0,
        longitude: float = 0.0,
    ) -> "RegionRecord":
        """
        Build a new region.
        
        Cloud regions start at (0, 0) and get real coordinates later;
        on-premises regions pass known coordinates directly.
        """
        latitude = coerce_coordinate("latitude", latitude)
        longitude = coerce_coordinate("longitude", longitude)
        validate_coordinates(latitude, longitude)
        return cls(
            provider_id=provider_id,
            code=code,
            name=name,
            image_reference=image_reference,
            latitude=latitude,
            longitude=longitude,
        )
    
    @classmethod
    def from_metadata(cls, provider_id: UUID, code: str, metadata: Mapping[str, Any]) -> "RegionRecord":
        """Build a region from a provider metadata entry."""
        data = dict(metadata)
        data["provider_id"] = provider_id
        data["code"] = code
        data["latitude"] = coerce_coordinate("latitude", data.get("latitude"))
        data["longitude"] = coerce_coordinate("longitude", data.get("longitude"))
        validate_coordinates(data["latitude"], data["longitude"])
        return cls.model_validate(data)
    
    def set_coordinates(self, latitude: float, longitude: float) -> None:
        latitude = coerce_coordinate("latitude", latitude)
        longitude = coerce_coordinate("longitude", longitude)
        validate_coordinates(latitude, longitude)
        self.latitude = latitude
        self.longitude = longitude
    
    def set_security_group_id(self, security_group_id: Optional[str]) -> None:
        if self.details is None:
            self.details = {}
        self.details[SECURITY_GROUP_KEY] = security_group_id
    
    def get_security_group_id(self) -> Optional[str]:
        if self.details is None:
            return None
        value = self.details.get(SECURITY_GROUP_KEY)
        return None if value is None else str(value)
    
    def set_config(self, config: Mapping[str, str]) -> None:
        """Merge config into the current config; keys not given are kept."""
        merged = self.get_config()
        merged.update(config)
        self.config = merged
    
    def get_config(self) -> Dict[str, str]:
        if self.config is None:
            return {}
        return dict(self.config)
    
    def get_masked_config(self, policy: Optional[MaskingPolicy] = None) -> Dict[str, Any]:
        if self.config is None:
            return {}
        return mask_config(self.config, policy)
    
    def is_active(self) -> bool:
        return self.active
    
    def set_active_flag(self, active: bool) -> None:
        self.active = active
    
    def summary(self) -> RegionSummary:
        return RegionSummary(id=self.id, code=self.code, name=self.name)
