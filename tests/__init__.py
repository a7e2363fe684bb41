"""Test suite for motionkit.

- unit/: Unit tests, one directory per package area
- conftest.py: Shared fixtures (config, recording renderers, entity factories)
"""
