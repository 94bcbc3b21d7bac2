"""
Language-specific model resolvers.

This module contains resolvers for different target languages.
"""

from .rust import RustModelResolver, create_explicit_width_resolver, create_resolver

__all__ = [
    "RustModelResolver",
    "create_resolver",
    "create_explicit_width_resolver",
]
