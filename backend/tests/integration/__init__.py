"""
Integration tests package.

Real repositories on in-memory SQLite, and the HTTP surface through the
Flask test client.
"""
