# src/fxrates/__init__.py
"""
FXRates - Cached Currency Exchange Rates

Looks up and converts currency amounts using a single daily snapshot of
rates fetched from a remote provider, persisted as JSON and refreshed on a
fixed UTC schedule or whenever the snapshot goes stale.
"""

__version__ = "1.0.0"
