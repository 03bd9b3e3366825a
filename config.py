"""
Configuration Management Module
Handles loading environment variables and locating the MMDB databases
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

APP_DIR = Path(__file__).resolve().parent

CITY_DB_FILENAME = 'dbip-city-lite.mmdb'
ASN_DB_FILENAME = 'dbip-asn-lite.mmdb'


def env_flag(name, default=False):
    """Read a boolean environment variable ("true" or "1" enable it)"""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('true', '1')


class Config:
    """Application configuration class"""

    # Server Configuration
    LISTEN_ADDR = os.getenv('LISTEN_ADDR', ':8080')
    HEADLESS = env_flag('HEADLESS')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Lookup Configuration
    ENABLE_ONLINE_FEATURES = env_flag('ENABLE_ONLINE_FEATURES')
    DNS_TIMEOUT = float(os.getenv('DNS_TIMEOUT', 2.0))

    # Database Configuration
    CITY_DB_PATH = os.getenv('CITY_DB_PATH', '')
    ASN_DB_PATH = os.getenv('ASN_DB_PATH', '')

    # Frontend assets
    STATIC_DIR = APP_DIR / 'static'

    @staticmethod
    def database_candidates(filename):
        """
        Default locations searched for a database file

        Args:
            filename: MMDB file name

        Returns:
            List of candidate paths, in search order
        """
        return [
            APP_DIR / 'data' / filename,
            Path('/app/data') / filename,
            Path('data') / filename,
        ]

    @staticmethod
    def find_database(explicit_path, filename):
        """
        Resolve a database path
        Priority: explicit path > first existing default location

        Returns:
            Path string, or empty string if nothing was found
        """
        if explicit_path:
            return str(explicit_path)

        for candidate in Config.database_candidates(filename):
            if candidate.exists():
                return str(candidate)

        return ''

    @staticmethod
    def parse_listen_addr(addr):
        """
        Split a listen address into host and port

        Example:
            >>> Config.parse_listen_addr(':8080')
            ('0.0.0.0', 8080)
            >>> Config.parse_listen_addr('127.0.0.1:9000')
            ('127.0.0.1', 9000)
        """
        host, sep, port = addr.rpartition(':')
        if not sep:
            raise ValueError(f"Invalid listen address: {addr!r}")

        host = host.strip('[]') or '0.0.0.0'

        try:
            return host, int(port)
        except ValueError:
            raise ValueError(f"Invalid listen address: {addr!r}") from None
