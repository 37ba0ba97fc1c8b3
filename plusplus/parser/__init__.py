"""Parser package for Plus++.

This package splits the syntax validator into a coordinating class and the
per-statement rules. The :class:`Validator` class is exposed at the package
level for convenience.


File: __init__.py
Version: 0.1.0
License: MIT
"""

from .validator import Validator, validate

__all__ = ["Validator", "validate"]
