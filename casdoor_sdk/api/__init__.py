"""Framework boundary helpers."""
from .errors import casdoor_error_response, register_error_handlers

__all__ = ["casdoor_error_response", "register_error_handlers"]
