"""
Unit tests package.

Services, DTOs and helpers tested in isolation; repositories are replaced by
``Mock(spec=Interface)`` factories.
"""
