"""
Field Projection Module
Reduces an IPRecord to the fields a client asked for
"""

from utils.validators import normalize_fields

# Fields a client may request; ip and attribution are always returned
PROJECTABLE_FIELDS = (
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
)


def project(record, requested_fields):
    """
    Build a reduced view of a record

    Field names are case-insensitive. Unknown names are ignored, and a
    requested field with no value is left out like in the full record.
    in_eu is always a boolean, so it is returned whenever requested.

    Args:
        record: IPRecord
        requested_fields: Iterable of field names

    Returns:
        Dictionary with ip, attribution and the recognized requested fields

    Example:
        project(record, ['COUNTRY', 'bogus']) returns ip, attribution and
        country only.
    """
    result = {
        'ip': record.ip,
        'attribution': record.attribution,
    }

    for name in normalize_fields(requested_fields):
        if name not in PROJECTABLE_FIELDS or name in result:
            continue

        value = getattr(record, name)
        if value is None or value == '':
            continue
        result[name] = value

    return result
