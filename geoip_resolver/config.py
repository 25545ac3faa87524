"""
配置模块，从环境变量读取查询参数。
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_IPINFO_URL = "https://ipinfo.io/{ip}/country"
DEFAULT_IPINFO_TIMEOUT = 2.0

# 容器内部路径，对应宿主机挂载的 ipinfo_lite.mmdb
DEFAULT_EXTERNAL_DB = "/dashboard/data/ipinfo_lite.mmdb"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """查询配置"""

    ipinfo_url: str = DEFAULT_IPINFO_URL
    ipinfo_token: Optional[str] = None
    ipinfo_timeout: float = DEFAULT_IPINFO_TIMEOUT
    remote_enabled: bool = True
    external_db_path: str = DEFAULT_EXTERNAL_DB

    @classmethod
    def from_env(cls) -> "Settings":
        """
        从环境变量构建配置

        Returns:
            Settings: 未设置的项使用默认值
        """
        timeout = os.getenv('IPINFO_TIMEOUT')
        return cls(
            ipinfo_url=os.getenv('IPINFO_URL', DEFAULT_IPINFO_URL),
            ipinfo_token=os.getenv('IPINFO_TOKEN') or None,
            ipinfo_timeout=float(timeout) if timeout else DEFAULT_IPINFO_TIMEOUT,
            remote_enabled=_env_bool('GEOIP_REMOTE_ENABLED', True),
            external_db_path=os.getenv('GEOIP_EXTERNAL_DB', DEFAULT_EXTERNAL_DB),
        )
