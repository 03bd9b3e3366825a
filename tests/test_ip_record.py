import dataclasses

import pytest

from models.ip_record import ATTRIBUTION, FIELD_ORDER, IPRecord


def test_attribution_constant():
    assert ATTRIBUTION == "IP Geolocation by DB-IP (https://db-ip.com)"


def test_minimal_record_serializes_ip_and_attribution_only():
    assert IPRecord(ip='10.0.0.1').to_dict() == {
        'ip': '10.0.0.1',
        'attribution': ATTRIBUTION,
    }


def test_full_record_keeps_wire_order():
    record = IPRecord(
        ip='8.8.8.8',
        hostname='dns.google',
        country='United States',
        iso_code='US',
        in_eu=True,
        city='Mountain View',
        region='California',
        latitude=37.4056,
        longitude=-122.0775,
        timezone='America/Los_Angeles',
        asn=15169,
        organization='Google LLC',
    )

    assert tuple(record.to_dict()) == FIELD_ORDER


def test_in_eu_false_is_omitted():
    data = IPRecord(ip='8.8.8.8', country='United States', in_eu=False).to_dict()
    assert 'in_eu' not in data
    assert data['country'] == 'United States'


def test_empty_strings_are_omitted():
    data = IPRecord(ip='8.8.8.8', city='', organization='').to_dict()
    assert 'city' not in data
    assert 'organization' not in data


def test_zero_coordinates_are_a_location():
    data = IPRecord(ip='1.2.3.4', latitude=0.0, longitude=0.0).to_dict()
    assert data['latitude'] == 0.0
    assert data['longitude'] == 0.0


def test_asn_zero_is_kept():
    assert IPRecord(ip='1.2.3.4', asn=0).to_dict()['asn'] == 0


def test_coordinates_must_come_together():
    with pytest.raises(ValueError):
        IPRecord(ip='1.2.3.4', latitude=1.0)


def test_record_is_immutable():
    record = IPRecord(ip='8.8.8.8')
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.city = 'Elsewhere'
