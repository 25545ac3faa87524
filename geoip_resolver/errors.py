"""
GeoIP 查询异常定义模块。
"""


class GeoIPError(Exception):
    """所有 GeoIP 查询异常的基类"""


class InvalidInputError(GeoIPError):
    """IP 地址为空或无法解析"""


class RemoteUnavailableError(GeoIPError):
    """远程查询失败：网络错误、非 200 状态码或返回内容不是 2 位代码"""


class DatabaseInitError(GeoIPError):
    """外部数据库和内置数据库都无法打开"""


class RecordNotFoundError(GeoIPError):
    """数据库中没有该 IP 的记录"""


class CodeNotFoundError(GeoIPError):
    """找到记录，但没有可用的国家/洲代码"""
