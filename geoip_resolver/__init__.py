"""
IP 地址国家代码查询：ipinfo.io 优先，本地 mmdb 数据库兜底。
"""

from geoip_resolver.config import Settings
from geoip_resolver.db.database import DatabaseHandle, DatabaseSource
from geoip_resolver.errors import (
    CodeNotFoundError,
    DatabaseInitError,
    GeoIPError,
    InvalidInputError,
    RecordNotFoundError,
    RemoteUnavailableError,
)
from geoip_resolver.models import IPRecord, extract_code
from geoip_resolver.resolver import Resolver

__all__ = [
    'Settings',
    'DatabaseHandle',
    'DatabaseSource',
    'GeoIPError',
    'InvalidInputError',
    'RemoteUnavailableError',
    'DatabaseInitError',
    'RecordNotFoundError',
    'CodeNotFoundError',
    'IPRecord',
    'extract_code',
    'Resolver',
]
