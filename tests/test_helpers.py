import dns.exception
import pytest
from werkzeug.datastructures import Headers

from utils.helpers import debug_info, get_client_ip, reverse_dns, split_host, strip_trailing_dot
from utils.validators import is_valid_ip, normalize_fields, parse_ip


class FakeAnswer:
    def __init__(self, text):
        self.text = text

    def to_text(self):
        return self.text


class FakeResolver:
    def __init__(self, names=(), error=None):
        self.names = names
        self.error = error

    def resolve(self, qname, rdtype, lifetime=None):
        if self.error is not None:
            raise self.error
        return [FakeAnswer(name) for name in self.names]


@pytest.mark.parametrize('headers, remote_addr, expected', [
    ({}, '192.168.1.1', '192.168.1.1'),
    ({}, '192.168.1.1:12345', '192.168.1.1'),
    ({'X-Forwarded-For': '10.0.0.1, 192.168.1.1'}, '127.0.0.1', '10.0.0.1'),
    ({'X-Real-IP': '10.0.0.2'}, '127.0.0.1', '10.0.0.2'),
    ({'X-Forwarded-For': '10.0.0.1', 'X-Real-IP': '10.0.0.2'}, '127.0.0.1', '10.0.0.1'),
    ({'X-Forwarded-For': 'garbage', 'X-Real-IP': '10.0.0.2'}, '127.0.0.1', '10.0.0.2'),
    ({'X-Real-IP': 'garbage'}, '127.0.0.1', '127.0.0.1'),
    ({'X-Forwarded-For': '2001:db8::1'}, '127.0.0.1', '2001:db8::1'),
])
def test_get_client_ip(headers, remote_addr, expected):
    assert get_client_ip(headers, remote_addr) == expected


@pytest.mark.parametrize('addr, expected', [
    ('10.0.0.1', '10.0.0.1'),
    ('10.0.0.1:80', '10.0.0.1'),
    ('[::1]:8080', '::1'),
    ('::1', '::1'),
    ('', ''),
])
def test_split_host(addr, expected):
    assert split_host(addr) == expected


def test_strip_trailing_dot():
    assert strip_trailing_dot('dns.google.') == 'dns.google'
    assert strip_trailing_dot('dns.google') == 'dns.google'
    assert strip_trailing_dot('dns.google..') == 'dns.google.'


def test_reverse_dns_first_name():
    resolver = FakeResolver(['one.one.one.one.', 'other.example.'])
    assert reverse_dns('1.1.1.1', resolver=resolver) == 'one.one.one.one'


def test_reverse_dns_failure():
    resolver = FakeResolver(error=dns.exception.DNSException("no PTR record"))
    assert reverse_dns('10.0.0.1', resolver=resolver) is None


def test_reverse_dns_empty_answer():
    assert reverse_dns('10.0.0.1', resolver=FakeResolver([])) is None


def test_reverse_dns_invalid_address():
    assert reverse_dns('not-an-ip', resolver=FakeResolver(['x.'])) is None


def test_debug_info():
    headers = {'X-Forwarded-For': '10.0.0.1', 'CF-Connecting-IP': '10.0.0.9'}
    info = debug_info(headers, '127.0.0.1', 'localhost:8080', '/api/debug')

    assert info['remoteAddr'] == '127.0.0.1'
    assert info['headers'] == headers
    assert info['xForwardedFor'] == '10.0.0.1'
    assert info['cfConnectingIP'] == '10.0.0.9'
    assert info['xRealIP'] == ''
    assert info['detectedClientIP'] == '10.0.0.1'


def test_debug_info_repeated_header_keeps_first_value():
    headers = Headers([('X-Forwarded-For', '10.0.0.1'), ('X-Forwarded-For', '10.0.0.2')])
    info = debug_info(headers, '127.0.0.1', 'localhost', '/api/debug')

    assert info['headers'] == {'X-Forwarded-For': '10.0.0.1'}
    assert info['xForwardedFor'] == '10.0.0.1'


def test_validators():
    assert is_valid_ip('8.8.8.8')
    assert not is_valid_ip('256.1.1.1')
    assert str(parse_ip(' 8.8.8.8 ')) == '8.8.8.8'
    assert parse_ip('nope') is None
    assert normalize_fields(['Country', '', ' CITY ']) == ['country', 'city']
