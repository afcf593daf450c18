"""Test suite for canvasfx.

Test Structure:
- unit/: Unit tests per package (values, schema, resolution, scaling,
  effects, config, utils, cli)
- conftest.py: Shared fixtures and test configuration
"""
