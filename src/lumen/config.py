"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(log_level="debug", log_format="text")
    """

    # Logging
    log_level: str = "info"
    log_format: str = "json"  # "json" or "text"
    logger_name: str = "lumen.router"

    # Recovery
    stack_limit: int = 8 * 1024  # Bytes of traceback kept in PanicInfo.stack
