"""k1s0 構造化エラーライブラリ"""

from .attrs import (
    BAD_KEY,
    Attr,
    AttrGroup,
    AttrKind,
    any_,
    attrs_from,
    bool_,
    duration,
    float_,
    group,
    int_,
    string,
    time,
)
from .chain import as_error, is_error, iter_chain
from .correlation import (
    ContextVarCorrelationSource,
    CorrelationIds,
    CorrelationSource,
    OtelSpanSource,
    StaticCorrelationSource,
    get_correlation_ids,
    reset_correlation_ids,
    set_correlation_ids,
)
from .error import (
    CAUSE_KEY,
    OP_KEY,
    RESERVED_KEYS,
    SPAN_ID_KEY,
    TRACE_ID_KEY,
    StructuredError,
    StructuredLoggable,
    new_error,
)
from .logger import render_structured_values

__all__ = [
    "StructuredError",
    "StructuredLoggable",
    "new_error",
    "OP_KEY",
    "CAUSE_KEY",
    "TRACE_ID_KEY",
    "SPAN_ID_KEY",
    "RESERVED_KEYS",
    "Attr",
    "BAD_KEY",
    "AttrGroup",
    "AttrKind",
    "attrs_from",
    "any_",
    "bool_",
    "duration",
    "float_",
    "group",
    "int_",
    "string",
    "time",
    "iter_chain",
    "is_error",
    "as_error",
    "CorrelationIds",
    "CorrelationSource",
    "OtelSpanSource",
    "StaticCorrelationSource",
    "ContextVarCorrelationSource",
    "set_correlation_ids",
    "get_correlation_ids",
    "reset_correlation_ids",
    "render_structured_values",
]
