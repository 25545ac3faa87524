"""
IP 国家代码查询入口。
"""

from typing import List, Optional

from geoip_resolver.config import Settings
from geoip_resolver.db.database import DatabaseSource
from geoip_resolver.errors import CodeNotFoundError, GeoIPError
from geoip_resolver.providers import CountryCodeProvider, get_providers
from geoip_resolver.providers.base import IPInput
from geoip_resolver.utils.logger import setup_logger

logger = setup_logger('resolver')


class Resolver:
    """按优先级依次尝试各个提供方，返回第一个成功的 2 位小写代码"""

    def __init__(self, settings: Optional[Settings] = None,
                 source: Optional[DatabaseSource] = None,
                 providers: Optional[List[CountryCodeProvider]] = None):
        """
        初始化查询器

        Args:
            settings: 查询配置，如果为None则从环境变量读取
            source: 本地数据库来源，如果为None则按配置新建（首次查询时才打开）
            providers: 指定的提供方列表，如果为None则使用 get_providers 的默认顺序
        """
        self.settings = settings or Settings.from_env()
        self.source = source or DatabaseSource(self.settings.external_db_path)
        if providers is None:
            providers = get_providers(self.settings, self.source)
        self.providers = providers

    def lookup(self, ip: IPInput) -> str:
        """
        查询 IP 对应的国家代码（极端情况下返回洲代码）

        只有最后一个提供方的异常会抛给调用方，前面的失败只记录日志并回退。

        Raises:
            GeoIPError: 所有提供方都查询失败
        """
        if not self.providers:
            raise GeoIPError("no providers configured")

        last = len(self.providers) - 1
        for index, provider in enumerate(self.providers):
            try:
                code = provider.lookup(ip)
            except GeoIPError as e:
                if index == last:
                    raise
                logger.debug(f"{provider.name} 查询 {ip} 失败: {e}，尝试下一个提供方")
                continue

            if code:
                return code

        raise CodeNotFoundError("IP not found")
