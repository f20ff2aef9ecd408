"""
Car API: CRUD over cars behind username/password bearer-token auth.
"""

__version__ = "1.0.0"
