"""Repository interfaces and implementations.

This package defines abstract repository interfaces for the domain entities and
concrete implementations, such as the SQLite adapters under
:mod:`tipscore.repositories.sqlite`.
"""
