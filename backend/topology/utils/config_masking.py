"""
Redaction of sensitive configuration values for external display.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from topology.core.config import settings

MASKED_FIELD_VALUE = "********"


class MaskingPolicy:
    """
    Decides which configuration keys are sensitive.
    
    A key is sensitive when its upper-cased name contains any of the markers,
    so "AWS_ACCESS_KEY_ID" and "db_password" are both caught by the defaults.
    """
    
    def __init__(self, markers: Optional[Iterable[str]] = None):
        if markers is None:
            markers = settings.SENSITIVE_CONFIG_KEY_MARKERS
        self.markers = tuple(marker.upper() for marker in markers)
    
    def is_sensitive(self, key: str) -> bool:
        upper_key = key.upper()
        return any(marker in upper_key for marker in self.markers)


def mask_value(value: Any) -> str:
    """
    Mask a single value.
    Short values are fully hidden; longer ones keep two characters at each end.
    """
    if value is None:
        return MASKED_FIELD_VALUE
    text = str(value)
    if len(text) < 5:
        return MASKED_FIELD_VALUE
    return text[:2] + "*" * (len(text) - 4) + text[-2:]


def mask_config(config: Mapping[str, Any], policy: Optional[MaskingPolicy] = None) -> Dict[str, Any]:
    """Return a redacted copy of config; the input is left untouched."""
    policy = policy or MaskingPolicy()
    masked = {}
    for key, value in config.items():
        if isinstance(value, Mapping):
            masked[key] = mask_config(value, policy)
        elif policy.is_sensitive(key):
            masked[key] = mask_value(value)
        else:
            masked[key] = value
    return masked
