"""Configuration package.

Note: settings are built on demand by :func:`tipscore.config.settings.load_settings`
and passed explicitly to the services; nothing is constructed at import time.
"""

__all__: list[str] = []
