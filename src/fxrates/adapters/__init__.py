"""
Adapters Layer - Infrastructure and External Interfaces

This package contains adapters for external systems:
- Rates provider API client
- Snapshot file persistence
- Reply formatting
- Telegram bot interface
"""
