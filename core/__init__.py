"""
Core module for shared client infrastructure.

This module contains:
- Client exceptions and value objects
- Cache, option store, HTTP and site context adapters
- Settings and metrics
"""
