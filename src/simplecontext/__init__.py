"""simplecontext: implicit key-value storage scoped to asyncio execution chains.

Values set in one forked branch stay visible to every continuation that
branch schedules, and invisible to sibling branches, without threading a
context argument through the code.
"""

from simplecontext.config import ContextConfig, get_default_config, load_config_from_env
from simplecontext.context import SimpleContext, create_simple_context
from simplecontext.errors import ContextError, InvalidKeyError

__all__ = [
    "ContextConfig",
    "ContextError",
    "InvalidKeyError",
    "SimpleContext",
    "create_simple_context",
    "get_default_config",
    "load_config_from_env",
]
