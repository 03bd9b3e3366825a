"""
Geolocation Service Module
Answers IP lookups from the local DB-IP city and ASN databases
"""

import logging

import geoip2.database
import geoip2.errors

from models.ip_record import IPRecord
from services.exceptions import (
    DatabaseCloseError,
    DatabaseOpenError,
    InvalidIPError,
    LookupFailedError,
    ServiceClosedError,
)
from utils.helpers import reverse_dns
from utils.rwlock import ReadWriteLock
from utils.validators import parse_ip

logger = logging.getLogger("ipwhere.geo")

# Errors raised by geoip2/maxminddb for an unusable database or handle
READER_ERRORS = (OSError, RuntimeError, TypeError, ValueError)


class LookupService:
    """Geolocation + ASN lookup over two read-only MMDB databases"""

    def __init__(self, city_db_path, asn_db_path, enable_online_features=False,
                 dns_timeout=2.0, reader_factory=geoip2.database.Reader,
                 resolver=None):
        """
        Open both databases

        Args:
            city_db_path: Path to the city/location MMDB file
            asn_db_path: Path to the ASN MMDB file
            enable_online_features: Resolve hostnames with reverse DNS
            dns_timeout: Time budget for each reverse DNS query, in seconds
            reader_factory: Callable opening a database path
            resolver: dns.resolver.Resolver used for reverse DNS (optional)

        Raises:
            DatabaseOpenError: If either database cannot be opened
        """
        self.enable_online_features = enable_online_features
        self.dns_timeout = dns_timeout
        self.resolver = resolver
        self._lock = ReadWriteLock()
        self._closed = False

        self._city_db = self._open('city', city_db_path, reader_factory)
        try:
            self._asn_db = self._open('ASN', asn_db_path, reader_factory)
        except DatabaseOpenError:
            self._city_db.close()
            raise

    @staticmethod
    def _open(dataset, path, reader_factory):
        try:
            return reader_factory(str(path))
        except READER_ERRORS as e:
            raise DatabaseOpenError(dataset, path, e) from e

    @property
    def online_features_enabled(self):
        return self.enable_online_features

    @property
    def closed(self):
        return self._closed

    def lookup(self, ip):
        """
        Lookup geolocation and ASN information for an IP address

        A dataset with no entry for the address simply leaves its fields
        unset.

        Args:
            ip: IP address string or ipaddress object

        Returns:
            IPRecord

        Raises:
            InvalidIPError: If ip is not a valid address
            ServiceClosedError: If the service has been closed
            LookupFailedError: If neither database could be queried
        """
        address = parse_ip(ip)
        if address is None:
            raise InvalidIPError(ip)

        # ::ffff:a.b.c.d is reported and queried as a.b.c.d
        if address.version == 6 and address.ipv4_mapped is not None:
            address = address.ipv4_mapped

        ip_str = str(address)
        fields = {}

        with self._lock.read_locked():
            if self._closed:
                raise ServiceClosedError("lookup service is closed")

            city_ok = self._query_city(address, fields)
            asn_ok = self._query_asn(address, fields)

        if not city_ok and not asn_ok:
            raise LookupFailedError(f"both databases failed for {ip_str}")

        if self.enable_online_features:
            hostname = reverse_dns(ip_str, timeout=self.dns_timeout,
                                   resolver=self.resolver)
            if hostname:
                fields['hostname'] = hostname

        return IPRecord(ip=ip_str, **fields)

    def _query_city(self, address, fields):
        try:
            city = self._city_db.city(address)
        except geoip2.errors.AddressNotFoundError:
            return True
        except READER_ERRORS as e:
            logger.warning("City lookup failed for %s: %s", address, e)
            return False

        fields['country'] = city.country.name
        fields['iso_code'] = city.country.iso_code
        fields['in_eu'] = bool(city.country.is_in_european_union)
        fields['city'] = city.city.name

        if len(city.subdivisions) > 0:
            fields['region'] = city.subdivisions[0].name

        location = city.location
        if location.latitude is not None and location.longitude is not None:
            fields['latitude'] = location.latitude
            fields['longitude'] = location.longitude

        fields['timezone'] = location.time_zone
        return True

    def _query_asn(self, address, fields):
        try:
            asn = self._asn_db.asn(address)
        except geoip2.errors.AddressNotFoundError:
            return True
        except READER_ERRORS as e:
            logger.warning("ASN lookup failed for %s: %s", address, e)
            return False

        fields['asn'] = asn.autonomous_system_number
        fields['organization'] = asn.autonomous_system_organization
        return True

    def close(self):
        """
        Close both database readers
        Waits for in-flight lookups; later lookups raise ServiceClosedError

        Raises:
            DatabaseCloseError: If a reader fails to close
        """
        with self._lock.write_locked():
            if self._closed:
                return
            self._closed = True

            errors = []
            for dataset, reader in (('city', self._city_db), ('ASN', self._asn_db)):
                try:
                    reader.close()
                except READER_ERRORS as e:
                    errors.append((dataset, e))

        if errors:
            raise DatabaseCloseError(errors)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
