"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Atomic I/O and YAML handling (fs)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (settings, generator, scripts).
"""
