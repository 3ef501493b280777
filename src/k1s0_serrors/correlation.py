"""相関ID（トレースID・スパンID）の取得元"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import structlog
from opentelemetry import trace

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CorrelationIds:
    """トレースIDとスパンIDの組。"""

    trace_id: str
    span_id: str

    @property
    def is_valid(self) -> bool:
        return bool(self.trace_id) and bool(self.span_id)


@runtime_checkable
class CorrelationSource(Protocol):
    """現在の実行コンテキストから相関IDを取得する。"""

    def current_ids(self) -> CorrelationIds | None:
        """アクティブなコンテキストがなければ None を返す。"""
        ...


class OtelSpanSource:
    """OpenTelemetry のカレントスパンから相関IDを取得する。"""

    def current_ids(self) -> CorrelationIds | None:
        ctx = trace.get_current_span().get_span_context()
        if not ctx.is_valid:
            logger.debug("no active span")
            return None
        return CorrelationIds(
            trace_id=trace.format_trace_id(ctx.trace_id),
            span_id=trace.format_span_id(ctx.span_id),
        )


class StaticCorrelationSource:
    """固定の相関IDを返す。空文字列はコンテキストなしとして扱う。"""

    def __init__(self, trace_id: str = "", span_id: str = "") -> None:
        self._ids = CorrelationIds(trace_id=trace_id, span_id=span_id)

    def current_ids(self) -> CorrelationIds | None:
        return self._ids if self._ids.is_valid else None


_correlation_ids_var: contextvars.ContextVar[CorrelationIds | None] = contextvars.ContextVar(
    "serrors_correlation_ids", default=None
)

_CorrelationToken = contextvars.Token[CorrelationIds | None]


def set_correlation_ids(ids: CorrelationIds) -> _CorrelationToken:
    """現在のコンテキストに相関IDをセットする。"""
    return _correlation_ids_var.set(ids)


def get_correlation_ids() -> CorrelationIds | None:
    """現在のコンテキストから相関IDを取得する。"""
    return _correlation_ids_var.get()


def reset_correlation_ids(token: contextvars.Token[Any]) -> None:
    """set_correlation_ids で取得したトークンでリセットする。"""
    _correlation_ids_var.reset(token)


class ContextVarCorrelationSource:
    """contextvars にセットされた相関IDを返す。"""

    def current_ids(self) -> CorrelationIds | None:
        ids = get_correlation_ids()
        if ids is None or not ids.is_valid:
            logger.debug("no correlation ids in context")
            return None
        return ids
