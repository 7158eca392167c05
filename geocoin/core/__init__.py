"""Core data models and world representation.

Import from the submodules directly; ``geocoin.systems`` depends on
``geocoin.core.models``, so this package stays free of re-exports.
"""
