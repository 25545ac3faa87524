"""
本地 mmdb 数据库选择模块。

优先使用外部挂载的 ipinfo_lite.mmdb，打不开时回退到随包发布的 geoip.db。
选择只做一次，结果（句柄或错误）在整个生命周期内复用。
"""

import os
import threading
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Optional, Union

import maxminddb

from geoip_resolver.config import DEFAULT_EXTERNAL_DB
from geoip_resolver.errors import DatabaseInitError
from geoip_resolver.utils.logger import setup_logger

logger = setup_logger('database')

SOURCE_EXTERNAL = 'external'
SOURCE_EMBEDDED = 'embedded'


def embedded_db_resource():
    """随包发布的内置数据库 geoip_resolver/data/geoip.db"""
    return resources.files('geoip_resolver').joinpath('data', 'geoip.db')


@dataclass(frozen=True)
class DatabaseHandle:
    """已打开的数据库，只读，可被多个线程共享"""
    reader: maxminddb.Reader
    source: str
    path: str


class DatabaseSource:
    """数据库来源选择器"""

    def __init__(self, external_path: Optional[Union[str, os.PathLike]] = DEFAULT_EXTERNAL_DB,
                 embedded=None):
        """
        Args:
            external_path: 外部数据库路径，为None时只使用内置数据库
            embedded: 内置数据库资源（Path 或 importlib.resources 的 Traversable），默认使用包内 data/geoip.db
        """
        self.external_path = Path(external_path) if external_path else None
        self.embedded = embedded if embedded is not None else embedded_db_resource()
        self._lock = threading.Lock()
        self._ready = False
        self._handle: Optional[DatabaseHandle] = None
        self._error: Optional[DatabaseInitError] = None

    def get(self) -> DatabaseHandle:
        """
        获取数据库句柄，首次调用时完成初始化

        Raises:
            DatabaseInitError: 外部和内置数据库都无法打开（结果会被缓存，不会重试）
        """
        if not self._ready:
            with self._lock:
                if not self._ready:
                    try:
                        self._initialize()
                    except Exception as e:
                        logger.error(f"数据库初始化失败: {e}")
                        self._error = DatabaseInitError(f"database initialization failed: {e}")
                        self._error.__cause__ = e
                    finally:
                        self._ready = True

        if self._error is not None:
            raise self._error
        return self._handle

    def close(self) -> None:
        """关闭已打开的数据库，之后的 get() 都会抛出 DatabaseInitError"""
        with self._lock:
            if self._handle is not None:
                self._handle.reader.close()
                self._handle = None
            self._error = DatabaseInitError("database closed")
            self._ready = True

    def _initialize(self) -> None:
        handle = self._open_external()
        if handle is None:
            try:
                handle = self._open_embedded()
            except DatabaseInitError as e:
                logger.error(f"数据库初始化失败: {e}")
                self._error = e
                return

        logger.info(f"使用{handle.source}数据库: {handle.path}")
        self._handle = handle

    def _open_external(self) -> Optional[DatabaseHandle]:
        if self.external_path is None:
            return None

        try:
            is_file = self.external_path.is_file()
        except OSError as e:
            # 无法 stat 视为不存在
            logger.warning(f"外部数据库 {self.external_path} 无法访问: {e}，回退到内置数据库")
            return None
        if not is_file:
            return None

        try:
            reader = maxminddb.open_database(str(self.external_path))
        except Exception as e:
            # 打开失败就继续往下，用内置数据库
            logger.warning(f"外部数据库 {self.external_path} 打开失败: {e}，回退到内置数据库")
            return None

        return DatabaseHandle(reader, SOURCE_EXTERNAL, str(self.external_path))

    def _open_embedded(self) -> DatabaseHandle:
        try:
            # MODE_MEMORY 会把整个文件读进内存，as_file 产生的临时文件可以立即清理
            with resources.as_file(self.embedded) as path:
                reader = maxminddb.open_database(os.fspath(path), maxminddb.MODE_MEMORY)
        except Exception as e:
            raise DatabaseInitError(f"cannot open embedded database {self.embedded}: {e}") from e

        return DatabaseHandle(reader, SOURCE_EMBEDDED, str(self.embedded))
