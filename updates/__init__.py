"""
Updates module - Licensed plugin update checks.

This module handles:
- UpdateInfo value object
- Cached update checks against the licensing service
- Injecting available updates into the host's update state
"""
