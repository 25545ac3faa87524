"""
本地 mmdb 数据库国家代码提供方模块。
"""

from typing import Optional

import maxminddb

from geoip_resolver.config import Settings
from geoip_resolver.db.database import DatabaseSource
from geoip_resolver.errors import CodeNotFoundError, InvalidInputError, RecordNotFoundError
from geoip_resolver.models import IPRecord, extract_code
from geoip_resolver.providers.base import CountryCodeProvider, IPInput, parse_ip
from geoip_resolver.utils.logger import setup_logger

logger = setup_logger('mmdb_provider')


class MmdbProvider(CountryCodeProvider):
    """本地 mmdb 数据库查询"""

    def __init__(self, source: Optional[DatabaseSource] = None, settings: Optional[Settings] = None):
        super().__init__()
        if source is None:
            settings = settings or Settings.from_env()
            source = DatabaseSource(settings.external_db_path)
        self.source = source

    def lookup(self, ip: IPInput) -> str:
        handle = self.source.get()
        address = parse_ip(ip)

        if address.version == 6 and handle.reader.metadata().ip_version == 4:
            raise InvalidInputError(f"cannot look up IPv6 address {address} in an IPv4-only database")

        try:
            data = handle.reader.get(str(address))
        except maxminddb.InvalidDatabaseError as e:
            raise RecordNotFoundError(f"corrupt record for {address} in {handle.source} database: {e}") from e

        if data is None:
            raise RecordNotFoundError(f"{address} not found in {handle.source} database")
        if not isinstance(data, dict):
            raise CodeNotFoundError("IP not found")

        record = IPRecord.from_mapping(data)
        logger.debug(f"{address} 记录: {record}")
        return extract_code(record)
