"""
国家代码提供方注册模块。
"""

from typing import List, Optional

from geoip_resolver.config import Settings
from geoip_resolver.db.database import DatabaseSource
from geoip_resolver.providers.base import CountryCodeProvider, parse_ip
from geoip_resolver.providers.ipinfo import IpInfoProvider
from geoip_resolver.providers.mmdb import MmdbProvider

from geoip_resolver.utils.logger import setup_logger

logger = setup_logger('providers')


# 按优先级顺序注册提供方
def get_providers(settings: Optional[Settings] = None,
                  source: Optional[DatabaseSource] = None) -> List[CountryCodeProvider]:
    """获取所有启用的提供方，按优先级排序：远程 ipinfo 在前，本地数据库兜底"""
    settings = settings or Settings.from_env()
    source = source or DatabaseSource(settings.external_db_path)

    providers: List[CountryCodeProvider] = []
    if settings.remote_enabled:
        providers.append(IpInfoProvider(settings))
    providers.append(MmdbProvider(source))
    return providers


def get_provider_by_name(name: str, settings: Optional[Settings] = None,
                         source: Optional[DatabaseSource] = None) -> Optional[CountryCodeProvider]:
    """
    根据名称获取特定的提供方

    Args:
        name: 提供方名称，不区分大小写

    Returns:
        Optional[CountryCodeProvider]: 找到的提供方实例，如果未找到则返回None
    """
    name = name.lower()
    settings = settings or Settings.from_env()

    if name in ('ipinfo', 'ipinfoprovider'):
        return IpInfoProvider(settings)
    if name in ('mmdb', 'local', 'mmdbprovider'):
        return MmdbProvider(source or DatabaseSource(settings.external_db_path))

    logger.warning(f"未找到名为 {name} 的提供方")
    logger.info("可用的提供方: ipinfo, mmdb, local")
    return None


# 导出所有提供方类，方便直接导入
__all__ = [
    'CountryCodeProvider',
    'IpInfoProvider',
    'MmdbProvider',
    'parse_ip',
    'get_providers',
    'get_provider_by_name'
]
