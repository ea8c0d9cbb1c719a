"""
Configuration package for the hotel booking service.

Contains environment settings and the logging configuration.
"""

from hotelbook.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
