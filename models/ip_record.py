"""
IP Record Model
Normalized result of a geolocation + ASN lookup
"""

from dataclasses import dataclass
from typing import Optional

# Required by the DB-IP lite license; shown with every response
ATTRIBUTION = "IP Geolocation by DB-IP (https://db-ip.com)"

# Wire order of the serialized record
FIELD_ORDER = (
    'ip',
    'hostname',
    'country',
    'iso_code',
    'in_eu',
    'city',
    'region',
    'latitude',
    'longitude',
    'timezone',
    'asn',
    'organization',
    'attribution',
)


@dataclass(frozen=True)
class IPRecord:
    """Geolocation and network ownership data for one IP address"""

    ip: str
    hostname: Optional[str] = None
    country: Optional[str] = None
    iso_code: Optional[str] = None
    in_eu: bool = False
    city: Optional[str] = None
    region: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None
    asn: Optional[int] = None
    organization: Optional[str] = None
    attribution: str = ATTRIBUTION

    def __post_init__(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be set together")

    def to_dict(self):
        """
        Serialize the record for JSON output

        Fields without a value are left out entirely, and in_eu is only
        emitted when true. ip and attribution are always present.

        Returns:
            Dictionary in wire order
        """
        data = {}
        for name in FIELD_ORDER:
            value = getattr(self, name)
            if name in ('ip', 'attribution'):
                data[name] = value
            elif name == 'in_eu':
                if value:
                    data[name] = True
            elif value is not None and value != '':
                data[name] = value
        return data
