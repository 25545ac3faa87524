"""
日志工具模块。
"""

import logging
import os


def setup_logger(name='geoip_resolver'):
    """配置并返回日志记录器"""
    if name != 'geoip_resolver':
        name = f'geoip_resolver.{name}'

    level = os.getenv('GEOIP_LOG_LEVEL', 'INFO').upper()
    log_file = os.getenv('GEOIP_LOG_FILE')

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 避免重复添加处理器
    if not logger.handlers:
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

        # 控制台处理器
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        # 文件处理器，仅在配置了 GEOIP_LOG_FILE 时启用
        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
