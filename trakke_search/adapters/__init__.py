"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the search core to external systems like:
- Location registries (Kartverket place names and addresses)
- Request throttling (minimum-interval limiter)
- Caching systems (in-memory, null)
"""
