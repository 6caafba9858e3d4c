"""Source emission for resolver descriptors."""

from .python import PythonResolverEmitter, python_identifier, render_resolvers

__all__ = ["PythonResolverEmitter", "python_identifier", "render_resolvers"]
