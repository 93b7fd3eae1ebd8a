"""Routing: pattern matching and the method-keyed route table.

Routes are registered during setup and the table is frozen before the
app starts serving.
"""

from trill.routing.pattern import Pattern, PatternMatch, compile_pattern, match
from trill.routing.route import Route, RouteMatch
from trill.routing.router import METHODS, Router, trailing_slash_redirect

__all__ = [
    "METHODS",
    "Pattern",
    "PatternMatch",
    "Route",
    "RouteMatch",
    "Router",
    "compile_pattern",
    "match",
    "trailing_slash_redirect",
]
