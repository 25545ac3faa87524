"""
本地数据库记录模型及国家代码提取模块。
"""

from dataclasses import dataclass
from typing import Any, Mapping

from geoip_resolver.errors import CodeNotFoundError


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _english_name(data: Mapping[str, Any]) -> str:
    names = data.get("names")
    return _text(names.get("en")) if isinstance(names, Mapping) else ""


@dataclass(frozen=True)
class IPRecord:
    """
    本地数据库中的一条记录，兼容几种 mmdb 格式：

    - 内置 geoip.db：country/continent 是代码，country_name/continent_name 是名字
    - 外部 ipinfo_lite.mmdb：country/continent 是名字，country_code/continent_code 是代码
    - MaxMind GeoLite2：country.iso_code / continent.code 嵌套在子字典里
    """
    country_code: str = ""
    country: str = ""           # 内置库里是代码，ipinfo 库里是名字
    country_name: str = ""
    continent_code: str = ""
    continent: str = ""         # 同上
    continent_name: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "IPRecord":
        """把 maxminddb 返回的字典解码成 IPRecord，缺失或非字符串字段置为空串"""
        country_code = _text(data.get("country_code"))
        country = data.get("country")
        country_name = _text(data.get("country_name"))
        continent_code = _text(data.get("continent_code"))
        continent = data.get("continent")
        continent_name = _text(data.get("continent_name"))

        # GeoLite2 格式：{"country": {"iso_code": "US", "names": {"en": "United States"}}}
        if isinstance(country, Mapping):
            country_code = country_code or _text(country.get("iso_code"))
            country_name = country_name or _english_name(country)
            country = ""
        if isinstance(continent, Mapping):
            continent_code = continent_code or _text(continent.get("code"))
            continent_name = continent_name or _english_name(continent)
            continent = ""

        return cls(
            country_code=country_code,
            country=_text(country),
            country_name=country_name,
            continent_code=continent_code,
            continent=_text(continent),
            continent_name=continent_name,
        )


def extract_code(record: IPRecord) -> str:
    """
    按固定优先级从记录中取出 2 位小写代码

    Raises:
        CodeNotFoundError: 国家和洲字段都不可用
    """
    # ==== 国家码优先级 ====
    if record.country_code:
        return record.country_code.lower()
    if record.country and len(record.country) == 2:
        return record.country.lower()

    # ==== 洲码兜底 ====
    if record.continent_code:
        return record.continent_code.lower()
    if record.continent and len(record.continent) == 2:
        return record.continent.lower()

    raise CodeNotFoundError("IP not found")
