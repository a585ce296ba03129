"""Mutable response headers."""


class Headers(dict[str, str]):
    """Response headers accumulated by a handler.

    A plain ``dict`` with a ``set`` helper. Last write per key wins;
    keys are stored exactly as written.
    """

    __slots__ = ()

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value*, replacing any earlier value."""
        self[key] = value
