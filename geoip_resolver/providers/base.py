"""
国家代码提供方基类模块。
"""

import ipaddress
from abc import ABC, abstractmethod
from typing import Union

from geoip_resolver.errors import InvalidInputError
from geoip_resolver.utils.logger import setup_logger

logger = setup_logger('provider')

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPInput = Union[str, bytes, IPAddress]


def parse_ip(ip: IPInput) -> IPAddress:
    """
    把字符串、4/16 字节的二进制地址或 ipaddress 对象统一转换成 ipaddress 对象

    Raises:
        InvalidInputError: 地址为空或格式不正确
    """
    if ip is None or (isinstance(ip, (str, bytes)) and not ip):
        raise InvalidInputError("nil ip")
    if isinstance(ip, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return ip
    if isinstance(ip, str):
        ip = ip.strip()

    try:
        return ipaddress.ip_address(ip)
    except ValueError as e:
        raise InvalidInputError(f"invalid ip: {ip!r}") from e


class CountryCodeProvider(ABC):
    """国家代码提供方抽象基类"""

    def __init__(self):
        self.name = self.__class__.__name__
        logger.debug(f"初始化提供方: {self.name}")

    @abstractmethod
    def lookup(self, ip: IPInput) -> str:
        """
        查询 IP 对应的国家代码

        Args:
            ip: IP 地址

        Returns:
            str: 2 位小写代码，如 hk、us、cn

        Raises:
            GeoIPError: 查询失败
        """
        pass

    def __str__(self) -> str:
        return self.name
