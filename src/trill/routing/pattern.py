"""Route pattern compilation and matching.

A pattern is a ``/``-delimited template made of three kinds of segment::

    /users          literal  : must equal the path segment exactly
    /users/:id      named    : matches any one non-empty segment, binds it
    /static/*       wildcard : final segment only, matches any remainder

Patterns are compiled once at registration. Matching is a single pass over
the pattern's segments with no backtracking.
"""

from dataclasses import dataclass
from functools import lru_cache

from trill.errors import RoutePatternError

PARAM_PREFIX = ":"
WILDCARD = "*"

# Handlers receive the request under this keyword, so no segment may bind it.
RESERVED_PARAM_NAMES = frozenset({"request"})


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal:  ``users``  (is_param=False, is_wildcard=False)
    Named:    ``:id``    (is_param=True, param_name="id")
    Wildcard: ``*``      (is_wildcard=True)
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    is_wildcard: bool = False


@dataclass(frozen=True, slots=True)
class PatternMatch:
    """Result of a successful pattern match.

    ``params`` holds one value per named segment. ``wildcard`` is the
    path remainder consumed by a trailing ``*`` (``None`` when the
    pattern has no wildcard).
    """

    params: dict[str, str]
    wildcard: str | None = None


def split_path(path: str) -> list[str]:
    """Split a path into segments after stripping the leading ``/``.

    The root path (and the empty string) is the single empty segment::

        "/"          -> [""]
        "/users/42"  -> ["users", "42"]
    """
    if path.startswith("/"):
        path = path[1:]
    return path.split("/")


def parse_segment(part: str) -> PathSegment:
    """Classify one pattern segment."""
    if part == WILDCARD:
        return PathSegment(value=part, is_wildcard=True)
    if len(part) > 1 and part.startswith(PARAM_PREFIX):
        return PathSegment(value=part, is_param=True, param_name=part[1:])
    return PathSegment(value=part)


@dataclass(frozen=True, slots=True)
class Pattern:
    """A compiled route pattern.

    Build with ``compile_pattern()``, which validates the source first.
    """

    source: str
    segments: tuple[PathSegment, ...]
    has_named_params: bool
    has_wildcard: bool

    @property
    def param_names(self) -> tuple[str, ...]:
        """Names of the named segments, in pattern order."""
        return tuple(s.param_name for s in self.segments if s.param_name is not None)

    @property
    def is_static(self) -> bool:
        """True when the pattern has neither named nor wildcard segments."""
        return not (self.has_named_params or self.has_wildcard)

    def match(self, path: str) -> PatternMatch | None:
        """Test *path* against this pattern.

        Returns a ``PatternMatch`` on success, ``None`` otherwise. A failed
        attempt never leaves bindings behind: the params dict is local to
        the call and is only returned on success.
        """
        path = path or "/"

        # No named or wildcard segments: plain string equality
        if self.is_static:
            return PatternMatch(params={}) if path == self.source else None

        parts = split_path(path)
        segments = self.segments

        if self.has_wildcard:
            fixed = len(segments) - 1
            if len(parts) < fixed:
                return None
        else:
            fixed = len(segments)
            if len(parts) != fixed:
                return None

        params: dict[str, str] = {}
        for index in range(fixed):
            seg = segments[index]
            part = parts[index]
            if seg.param_name is not None:
                if not part:
                    return None
                params[seg.param_name] = part
            elif part != seg.value:
                return None

        if self.has_wildcard:
            return PatternMatch(params=params, wildcard="/".join(parts[fixed:]))
        return PatternMatch(params=params)


def _validate(pattern: str, segments: list[PathSegment]) -> None:
    if not pattern.startswith("/"):
        raise RoutePatternError(pattern, "patterns must start with '/'")

    if len(segments) > 1 and segments[-1].value == "":
        raise RoutePatternError(
            pattern,
            "trailing '/' is never matched; requests to it are redirected "
            "to the slash-stripped path",
        )

    seen: set[str] = set()
    last = len(segments) - 1
    for index, seg in enumerate(segments):
        if seg.value == PARAM_PREFIX:
            raise RoutePatternError(pattern, "':' must be followed by a parameter name")
        if seg.is_wildcard and index != last:
            raise RoutePatternError(pattern, "'*' is only allowed as the final segment")
        if seg.param_name is not None:
            if seg.param_name in RESERVED_PARAM_NAMES:
                raise RoutePatternError(
                    pattern, f"parameter name {seg.param_name!r} is reserved"
                )
            if seg.param_name in seen:
                raise RoutePatternError(
                    pattern, f"parameter {seg.param_name!r} appears more than once"
                )
            seen.add(seg.param_name)


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> Pattern:
    """Parse and validate a route pattern.

    The empty pattern is the root pattern ``/``.

    Raises ``RoutePatternError`` if the pattern could never match as
    written (see ``_validate``).

    Examples::

        compile_pattern("/users").is_static          -> True
        compile_pattern("/users/:id").param_names    -> ("id",)
        compile_pattern("/files/*").has_wildcard     -> True
    """
    pattern = pattern or "/"
    segments = [parse_segment(part) for part in split_path(pattern)]
    _validate(pattern, segments)
    return Pattern(
        source=pattern,
        segments=tuple(segments),
        has_named_params=any(s.is_param for s in segments),
        has_wildcard=any(s.is_wildcard for s in segments),
    )


def match(pattern: str, path: str) -> tuple[dict[str, str], bool]:
    """Match *path* against *pattern* in one call.

    Returns ``(params, True)`` on success and ``({}, False)`` otherwise.
    Prefer ``compile_pattern()`` + ``Pattern.match()`` on hot paths.
    """
    result = compile_pattern(pattern).match(path)
    if result is None:
        return {}, False
    return result.params, True
