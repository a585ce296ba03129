"""Constraint matching for route headers and query parameters."""

from collections.abc import Mapping

# Constraint value meaning "the key must be present, any value will do"
WILDCARD = "*"


def satisfies(constraints: Mapping[str, str], actual: Mapping[str, str]) -> bool:
    """Return True if *actual* meets every constraint.

    Each constrained key must be present in *actual*, and its value must
    equal the expected one unless the expectation is ``WILDCARD``.
    Empty constraints are always satisfied.
    """
    for key, expected in constraints.items():
        if key not in actual:
            return False
        if expected != WILDCARD and actual[key] != expected:
            return False
    return True
