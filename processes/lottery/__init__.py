"""Draft lottery process package.

Holds the pure draw engine (weighted selection without replacement), the
odds simulator, and a headless adapter/CLI that loads a config, validates it
with ``validators.draft_rules``, draws and exports the result.
"""
