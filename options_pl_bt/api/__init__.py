"""
HTTP transport: Flask app exposing the backtest engine
"""

from .app import create_app

__all__ = ["create_app"]
