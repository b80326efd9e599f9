"""
Built-in plugins for solcheck.

Linters under ``linters`` are found by ``solcheck.core.registry.discover_linters``.
"""
