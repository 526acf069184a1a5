"""
Licenses module - Local license lifecycle.

This module handles:
- LicenseRecord entity (last known license state)
- Durable license state in the host option store
- Validation cache
- License lifecycle (activate, validate, deactivate)
"""
