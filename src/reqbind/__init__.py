"""
reqbind

Bind HTTP request data (path variables, headers, query string, body) into
pydantic models guided by per-field tags.

Responsibilities:
- Expose package version metadata.
- Re-export the public API for flat imports:

    from reqbind import Header, Path, Query, bind_request
"""

from reqbind.binder import (
    VACUUM,
    Binder,
    Flag,
    PathValueFunc,
    bind_body,
    bind_header,
    bind_path,
    bind_query,
    bind_request,
    default_binder,
    path_params_value,
)
from reqbind.errors import (
    BindError,
    BodyDecodeError,
    FieldConversionError,
    InvalidDestinationError,
    UnsupportedFieldTypeError,
)
from reqbind.tags import Form, Header, Path, Query, Source, Tag
from reqbind.values import MultiValues, vacuum

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Binding
    "Binder",
    "Flag",
    "VACUUM",
    "PathValueFunc",
    "path_params_value",
    "default_binder",
    "bind_request",
    "bind_path",
    "bind_header",
    "bind_query",
    "bind_body",
    # Tags
    "Tag",
    "Source",
    "Path",
    "Header",
    "Query",
    "Form",
    # Values
    "MultiValues",
    "vacuum",
    # Errors
    "BindError",
    "InvalidDestinationError",
    "UnsupportedFieldTypeError",
    "FieldConversionError",
    "BodyDecodeError",
]


# --- Module Notes -----------------------------------------------------------
# `reqbind.deps` (FastAPI integration) is not imported here so the core only
# needs Starlette and pydantic at import time.
