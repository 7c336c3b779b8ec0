"""
Command-line entry points: ``wit-docs-inject`` and ``wit-docs-view``.
"""
