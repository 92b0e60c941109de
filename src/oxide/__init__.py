"""oxide: immutable Option and Result types for Python 3.13+.

Flat imports (preferred):
    from oxide import Option, Some, Nothing, Result, Ok, Err
    from oxide import safe_option, safe_result, UnwrapError

Submodule imports (for organization):
    from oxide.option import Option, Some, Nothing
    from oxide.result import Result, Ok, Err
    from oxide.capture import safe_option, safe_result
"""

from oxide import _config
from oxide._config import Settings, load_settings
from oxide._logging import configure_logging, get_logger
from oxide._sealed import seal_module

# Capture
from oxide.capture import safe_option, safe_result

# Errors
from oxide.errors import OxideError, UnwrapError

# Option types
from oxide.option import Nothing, NothingType, Option, Some, option

# Result types
from oxide.result import Err, Ok, Result

_config.apply_settings(_config.SETTINGS)

__all__ = [
    'Err',
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'OxideError',
    'Result',
    'Settings',
    'Some',
    'UnwrapError',
    'configure_logging',
    'get_logger',
    'load_settings',
    'option',
    'safe_option',
    'safe_result',
]

seal_module(__name__, __all__)
