"""
Utils Package Initialization.
"""

from .logger import setup_logger, get_logger, enable_console_logging

__all__ = ['setup_logger', 'get_logger', 'enable_console_logging']
