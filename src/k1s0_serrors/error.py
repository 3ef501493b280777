"""操作ラベル・属性・相関IDを持つ構造化エラー"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .attrs import Attr, AttrGroup, AttrsInput, attrs_from, string
from .correlation import CorrelationSource

OP_KEY = "op"
CAUSE_KEY = "cause"
TRACE_ID_KEY = "trace_id"
SPAN_ID_KEY = "span_id"

RESERVED_KEYS = frozenset({OP_KEY, CAUSE_KEY, TRACE_ID_KEY, SPAN_ID_KEY})


@runtime_checkable
class StructuredLoggable(Protocol):
    """ログ出力先に属性グループとして自身を渡せる値。"""

    def log_value(self) -> AttrGroup: ...


class StructuredError(Exception):
    """cause を包み、操作ラベルと属性を付与したエラー。

    cause がある場合 str(err) は "<operation>: <cause>"、ない場合は message。
    log_value() は呼ばれるたびに構造化ビューを組み立てる。順序は呼び出し側の
    属性、op、cause、trace_id、span_id。

    unwrap() と cause は常にコンストラクタに渡された cause を返す。
    ``raise new_error("Op", cause=a) from b`` のように from で送出すると
    __cause__ は b に置き換わるが、unwrap() と iter_chain は a をたどる。
    """

    def __init__(
        self,
        operation: str,
        message: str = "",
        cause: BaseException | None = None,
        attrs: AttrsInput = (),
        *,
        trace_id: str = "",
        span_id: str = "",
    ) -> None:
        super().__init__(message)
        self._operation = operation
        self._message = message
        self._cause = cause
        self._attrs = attrs_from(attrs)
        self._trace_id = trace_id or ""
        self._span_id = span_id or ""
        if cause is not None:
            self.__cause__ = cause

    @property
    def operation(self) -> str:
        return self._operation

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def attrs(self) -> tuple[Attr, ...]:
        return self._attrs

    @property
    def trace_id(self) -> str:
        return self._trace_id

    @property
    def span_id(self) -> str:
        return self._span_id

    def __str__(self) -> str:
        if self._cause is not None:
            return f"{self._operation}: {self._cause}"
        return self._message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(operation={self._operation!r}, "
            f"message={self._message!r}, cause={self._cause!r})"
        )

    def unwrap(self) -> BaseException | None:
        """包んでいる cause をそのまま返す。"""
        return self._cause

    def log_value(self) -> AttrGroup:
        attrs = list(self._attrs)
        attrs.append(string(OP_KEY, self._operation))
        if self._cause is not None:
            attrs.append(string(CAUSE_KEY, str(self._cause)))
        if self._trace_id:
            attrs.append(string(TRACE_ID_KEY, self._trace_id))
        if self._span_id:
            attrs.append(string(SPAN_ID_KEY, self._span_id))
        return AttrGroup(attrs)

    @classmethod
    def wrap(
        cls,
        cause: BaseException,
        operation: str,
        message: str = "",
        attrs: AttrsInput = (),
        *,
        source: CorrelationSource | None = None,
    ) -> StructuredError:
        return new_error(operation, message, cause, attrs, source=source)


def new_error(
    operation: str,
    message: str = "",
    cause: BaseException | None = None,
    attrs: AttrsInput = (),
    *,
    source: CorrelationSource | None = None,
) -> StructuredError:
    """StructuredError を作成する。

    Args:
        operation: 失敗した操作のラベル（例: "CreateUser"）
        message: cause がない場合に str() が返すメッセージ
        cause: 包むエラー
        attrs: Mapping、Attr、(key, value) の組。順序は保持される
        source: trace_id / span_id の取得元。一度だけ参照される。
            省略時は参照せず、相関IDは空のまま

    Returns:
        作成した StructuredError。作成は失敗しない
    """
    trace_id = span_id = ""
    if source is not None:
        ids = source.current_ids()
        if ids is not None and ids.is_valid:
            trace_id, span_id = ids.trace_id, ids.span_id
    return StructuredError(operation, message, cause, attrs, trace_id=trace_id, span_id=span_id)
