# src/ratecard/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (remote rate API)
- Persistence (device storage)
- Formatting (presentation rows)
"""

__all__ = []
