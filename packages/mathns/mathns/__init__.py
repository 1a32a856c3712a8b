"""mathns: Extensible Math Namespaces
-------------------------------------
Runtime registration of functions, constants and nested namespaces into a
live namespace, with lazy factories, typed-function merging, and an
expression-safe projection for sandboxed evaluators.

Quick start
-----------
>>> import mathns
>>> math = mathns.create(mathns.MathConfig())
>>> math.import_({"two": 2})
>>> math.two
2
"""

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all

__all__ = list(_core_all)
__version__ = "0.1.0"
