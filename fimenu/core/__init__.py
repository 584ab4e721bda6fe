"""
==============================================================================
Core Package
==============================================================================

Core infrastructure for the application.

This package provides:
- AppException with consistent JSON error responses
- Exception factory functions for common error scenarios
- AdminAccessGate middleware (HTTP Basic on the admin prefix)

Usage:
------
    from fimenu.core import exceptions
    raise exceptions.product_not_found("dent")

==============================================================================
"""

from .exceptions import (
    AppException,
    register_exception_handlers,
)

__all__ = [
    "AppException",
    "register_exception_handlers",
]
