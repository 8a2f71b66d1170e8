"""Configuration for context instances.

Configuration only tunes diagnostics (naming, logging, depth warnings); it
never changes how stores are resolved, forked or copied.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

_TRUTHY = ("true", "1", "yes")


class ContextConfig(BaseModel):
    """Settings for a SimpleContext.

    Attributes:
        name: Label used in log events and repr
        chain_depth_warning: Chain depth at which a warning is logged; deep
            chains come from repeated in-place forks within one chain
        log_fork_events: Whether each fork emits a debug log event

    Example:
        >>> config = ContextConfig(name="request", chain_depth_warning=64)
        >>> context = SimpleContext(config)
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="default", min_length=1, description="Context label")
    chain_depth_warning: int = Field(
        default=1000, ge=1, description="Chain depth that triggers a warning"
    )
    log_fork_events: bool = Field(default=False, description="Log a debug event per fork")


def get_default_config() -> ContextConfig:
    """Get the default configuration.

    Returns:
        ContextConfig with default values
    """
    return ContextConfig()


def load_config_from_env(name: Optional[str] = None) -> ContextConfig:
    """Load context configuration from environment variables.

    Automatically loads variables from a .env file if present.

    Reads:
    - SIMPLECONTEXT_NAME: Context label
    - SIMPLECONTEXT_CHAIN_DEPTH_WARNING: Depth warning threshold
    - SIMPLECONTEXT_LOG_FORK_EVENTS: Log fork events (true/false)

    Args:
        name: Explicit label, takes precedence over SIMPLECONTEXT_NAME

    Returns:
        ContextConfig loaded from environment

    Raises:
        ValueError: If a numeric variable is not an integer
        pydantic.ValidationError: If a value is out of range
    """
    load_dotenv()

    label = name or os.getenv("SIMPLECONTEXT_NAME", "default")
    depth_warning = int(os.getenv("SIMPLECONTEXT_CHAIN_DEPTH_WARNING", "1000"))
    log_fork_events = os.getenv("SIMPLECONTEXT_LOG_FORK_EVENTS", "false").lower() in _TRUTHY

    return ContextConfig(
        name=label,
        chain_depth_warning=depth_warning,
        log_fork_events=log_fork_events,
    )
