"""HTTP surface of the production register."""

from .routes import router, register_error_handler

__all__ = ['router', 'register_error_handler']
