#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
IP 国家代码查询命令行工具。
"""

import sys
import argparse
import logging
from typing import List, Optional
from dotenv import load_dotenv

from geoip_resolver.config import Settings
from geoip_resolver.db.database import DatabaseSource
from geoip_resolver.errors import GeoIPError
from geoip_resolver.providers import get_provider_by_name
from geoip_resolver.resolver import Resolver
from geoip_resolver.utils.logger import setup_logger

# 加载环境变量
load_dotenv()

logger = setup_logger('main')

# 设置 requests 的日志记录
requests_log = logging.getLogger("urllib3")


def enable_http_debug() -> None:
    """打开 requests/urllib3 的调试日志"""
    requests_log.setLevel(logging.DEBUG)
    requests_log.propagate = True

    # 添加控制台处理器
    if not requests_log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        requests_log.addHandler(handler)


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    # 解析命令行参数
    parser = argparse.ArgumentParser(description="IP 国家代码查询工具")
    parser.add_argument(
        "ips",
        nargs="+",
        metavar="IP",
        help="要查询的 IP 地址，支持 IPv4/IPv6"
    )
    parser.add_argument(
        "--no-remote",
        help="跳过 ipinfo.io 远程查询，只使用本地数据库",
        action="store_true"
    )
    parser.add_argument(
        "--db",
        help="外部 mmdb 数据库路径，默认读取 GEOIP_EXTERNAL_DB 或 /dashboard/data/ipinfo_lite.mmdb",
        type=str,
        default=None
    )
    parser.add_argument(
        "--provider", "-p",
        help="只使用指定的提供方 (ipinfo | mmdb)，默认按优先级尝试所有提供方",
        type=str,
        default=None
    )
    parser.add_argument(
        "--verbose", "-v",
        help="启用HTTP请求调试模式，显示请求和响应的详细信息",
        action="store_true"
    )
    args = parser.parse_args(argv)

    if args.verbose:
        enable_http_debug()

    settings = Settings.from_env()
    if args.no_remote:
        settings.remote_enabled = False
    if args.db:
        settings.external_db_path = args.db

    source = DatabaseSource(settings.external_db_path)
    if args.provider:
        provider = get_provider_by_name(args.provider, settings, source)
        if provider is None:
            logger.error(f"未找到名为 {args.provider} 的提供方")
            return 1
        resolver = Resolver(settings, source, providers=[provider])
    else:
        resolver = Resolver(settings, source)

    failed = 0
    for ip in args.ips:
        try:
            code = resolver.lookup(ip)
        except GeoIPError as e:
            logger.error(f"{ip} 查询失败: {e}")
            failed += 1
            continue
        print(f"{ip}\t{code}")

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
