"""
Test configuration package.

Markers and collection hooks live in ``markers``; ``conftest`` re-exports them.
"""
