"""Shared type aliases used across trill modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: user-defined function with variable signature
Handler: TypeAlias = Callable[..., Any]

# Error / not-found handler: receives (request, error?) and returns a response value
ErrorHandler: TypeAlias = Callable[..., Any]
