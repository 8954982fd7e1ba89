"""Application configuration.

AppConfig is frozen: an application reads it once at construction and the
router options are fixed for the lifetime of the router.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(root_id="app", initial_path="/login")
    """

    # Host
    root_id: str = "root"
    initial_path: str | None = None  # None = ask the history collaborator

    # Navigation
    discard_stale_loads: bool = True  # Drop lazy resolutions overtaken by a newer load()
    placeholder_tag: str = "div"  # Tag of the transient reference node used during swaps

    # Logging
    configure_logging: bool = False
    log_level: str = "warning"
