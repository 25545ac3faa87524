"""
ipinfo.io 国家代码提供方模块。
"""

from typing import Optional

import requests

from geoip_resolver.config import Settings
from geoip_resolver.errors import RemoteUnavailableError
from geoip_resolver.providers.base import CountryCodeProvider, IPInput, parse_ip
from geoip_resolver.utils.logger import setup_logger

logger = setup_logger('ipinfo_provider')


class IpInfoProvider(CountryCodeProvider):
    """ipinfo.io 远程查询，best-effort，失败由调用方回退到本地数据库"""

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__()
        settings = settings or Settings.from_env()
        self.url_template = settings.ipinfo_url
        self.timeout = settings.ipinfo_timeout
        # token 可选：没有时匿名请求，可能被限流，按普通失败处理
        self.token = settings.ipinfo_token

    def lookup(self, ip: IPInput) -> str:
        address = parse_ip(ip)
        url = self.url_template.format(ip=address)
        params = {'token': self.token} if self.token else None

        logger.debug(f"从 ipinfo 查询 {address}")
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteUnavailableError(f"ipinfo request failed: {e}") from e

        if response.status_code != 200:
            raise RemoteUnavailableError(f"ipinfo status not OK: {response.status_code}")

        code = response.text.strip()

        # 简化判断：只要不是 2 个字符，就认为失败（过滤 HTML 错误页等）
        if len(code) != 2:
            raise RemoteUnavailableError(f"invalid country code from ipinfo: {code[:32]!r}")

        return code.lower()
