"""测试日志配置"""

import logging

from musically.logging_config import setup_logging


def test_curl_cffi_debug_suppressed():
    """测试：DEBUG 级别下 curl_cffi 日志仍不低于 INFO"""
    setup_logging("DEBUG")
    assert logging.getLogger("curl_cffi").level == logging.INFO


def test_level_name_case_insensitive():
    """测试：日志级别名称不区分大小写"""
    setup_logging("warning")
    assert logging.getLogger("curl_cffi").level == logging.WARNING


def test_repeated_setup_updates_root_level():
    """测试：重复调用时更新根日志级别"""
    setup_logging("INFO")
    setup_logging("ERROR")
    assert logging.getLogger().level == logging.ERROR
    setup_logging("INFO")
