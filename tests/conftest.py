import pytest

from app import create_app
from services.geo import LookupService
from tests.fakes import (
    ASN_PATH,
    CITY_PATH,
    FakeDatabases,
    FakeReader,
    StubLookupService,
    make_asn,
    make_city,
)


@pytest.fixture
def databases():
    city = FakeReader({
        '8.8.8.8': make_city(),
        '2001:4860:4860::8888': make_city(),
        '81.2.69.142': make_city(country='United Kingdom', iso_code='GB',
                                 city='London', subdivisions=('England',),
                                 latitude=51.5142, longitude=-0.0931,
                                 time_zone='Europe/London'),
        '5.6.7.8': make_city(country='Germany', iso_code='DE', in_eu=True,
                             city=None, subdivisions=(),
                             latitude=None, longitude=None, time_zone=None),
    })
    asn = FakeReader({
        '8.8.8.8': make_asn(),
        '2001:4860:4860::8888': make_asn(),
        '1.1.1.1': make_asn(13335, 'Cloudflare, Inc.'),
    })
    return FakeDatabases(city, asn)


@pytest.fixture
def service(databases):
    svc = LookupService(CITY_PATH, ASN_PATH, reader_factory=databases)
    yield svc
    svc.close()


@pytest.fixture
def stub_service():
    return StubLookupService()


@pytest.fixture
def static_dir(tmp_path):
    (tmp_path / 'index.html').write_text('<html>IPWhere</html>')
    (tmp_path / 'app.js').write_text('console.log("ipwhere");')
    return tmp_path


@pytest.fixture
def client(stub_service, static_dir):
    app = create_app(stub_service, static_dir=static_dir)
    app.config['TESTING'] = True
    return app.test_client()
