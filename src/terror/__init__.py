"""terror - error chains annotated with call-site locations.

Wrap failures with a message and the location of the wrap as they travel up
the stack, then print them compactly or as a full trace.

Quick Start:
    >>> import terror
    >>>
    >>> def read_config(path):
    ...     try:
    ...         return open(path).read()
    ...     except OSError as e:
    ...         raise terror.wrap_with_code(e, 123, "loading config")
    >>>
    >>> def initialize(path):
    ...     try:
    ...         return read_config(path)
    ...     except Exception as e:
    ...         raise terror.wrap(e, "initializing system")

Rendering:
    >>> str(err)           # compact, one line
    'initializing system: loading config: [Errno 2] No such file or directory: ...'
    >>> print(f"{err:v}")  # detailed
    initializing system
     --- at app/system.py:21 (initialize) ---
    caused by loading config
     --- at app/config.py:14 (read_config) ---
    caused by [Errno 2] No such file or directory: ...
    >>> terror.get_code(err)
    123

Sentinels and deferred wraps:
    >>> ERR_NOT_READY = terror.Const("not ready")
    >>> with terror.wrapping("getting question for %r", answer):
    ...     ...
"""

from __future__ import annotations

__version__ = "0.1.0"

# Chain nodes & rendering
from .chain import (
    ChainError,
    CodedError,
    DetailedRenderable,
    Located,
    TError,
    Verbose,
    render_compact,
    render_detailed,
    verbose,
)

# Closing helpers
from .closer import Closable, close_and_append_on_error, close_and_log_on_error

# Sentinels
from .const import Const

# Location capture
from .location import (
    NO_LOCATION,
    CaptureConfig,
    Location,
    capture,
    capture_config,
    clean_func_name,
    configure_capture,
    get_capture_config,
    reset_capture_config,
    set_capture_config,
)

# Aggregation
from .multi import ErrorSlot, MultiError, append_into, combine, errors

# Inspection
from .traverse import contains, find, get_code, root_error, unwrap, walk

# Construction
from .wrap import annotate, new, new_with_code, wrap, wrap_into, wrap_with_code, wrapping

__all__ = [
    # Construction
    "new", "wrap", "annotate", "wrap_into", "new_with_code", "wrap_with_code", "wrapping",
    # Chain nodes & rendering
    "ChainError", "TError", "CodedError", "Located", "DetailedRenderable",
    "render_compact", "render_detailed", "verbose", "Verbose",
    # Inspection
    "unwrap", "walk", "find", "contains", "root_error", "get_code",
    # Sentinels
    "Const",
    # Aggregation & closing
    "ErrorSlot", "MultiError", "append_into", "combine", "errors",
    "Closable", "close_and_append_on_error", "close_and_log_on_error",
    # Location capture
    "Location", "NO_LOCATION", "capture", "clean_func_name",
    "CaptureConfig", "capture_config", "configure_capture", "get_capture_config",
    "reset_capture_config", "set_capture_config",
]
