"""structlog 連携: 構造化エラーを属性グループとして出力する"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

import structlog

from .attrs import Attr, AttrGroup, AttrKind
from .error import StructuredLoggable


def _render_attr(attr: Attr) -> Any:
    if attr.kind is AttrKind.DURATION and isinstance(attr.value, timedelta):
        return attr.value.total_seconds()
    if attr.kind is AttrKind.TIME and isinstance(attr.value, datetime):
        return attr.value.isoformat()
    return _resolve(attr.value)


def _render_group(group: AttrGroup) -> dict[str, Any]:
    # 重複キーは後勝ち
    return {a.key: _render_attr(a) for a in group}


def _resolve(value: Any) -> Any:
    if isinstance(value, AttrGroup):
        return _render_group(value)
    if isinstance(value, StructuredLoggable):
        return _render_group(value.log_value())
    return value


def render_structured_values(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """StructuredLoggable な値を log_value() の結果の辞書に置き換える structlog プロセッサー。

    log_value() はこのプロセッサーが値を出力するときにだけ呼ばれる。
    ロガーの設定は利用側が行い、このプロセッサーをレンダラーの前に置く。
    """
    for key, value in event_dict.items():
        if isinstance(value, (AttrGroup, StructuredLoggable)):
            event_dict[key] = _resolve(value)
    return event_dict
