"""構造化エラー出力用の型付きキー・値属性"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Iterable, Mapping, Tuple, Union

BAD_KEY = "!BADKEY"


class AttrKind(str, Enum):
    """Attr が保持する値の種別。"""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    DURATION = "duration"
    TIME = "time"
    GROUP = "group"
    ANY = "any"


@dataclass(frozen=True)
class Attr:
    """値の種別付きのキー・値ペア。"""

    key: str
    value: Any
    kind: AttrKind = AttrKind.ANY

    @classmethod
    def of(cls, key: str, value: Any) -> Attr:
        return any_(key, value)

    def __repr__(self) -> str:
        return f"Attr({self.key!r}, {self.value!r}, {self.kind.value})"


class AttrGroup(Tuple[Attr, ...]):
    """順序付きで不変な属性の列。

    重複キーはそれぞれ別の要素として保持する。辞書ビューでのみ後勝ちになる。
    """

    def __new__(cls, attrs: Iterable[Attr] = ()) -> AttrGroup:
        return super().__new__(cls, attrs)

    def keys(self) -> list[str]:
        return [a.key for a in self]

    def get(self, key: str, default: Any = None) -> Any:
        """key に一致する最後の属性の値を返す。"""
        for a in reversed(self):
            if a.key == key:
                return a.value
        return default

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for a in self:
            out[a.key] = a.value.to_dict() if isinstance(a.value, AttrGroup) else a.value
        return out

    def __repr__(self) -> str:
        return f"AttrGroup({list(self)!r})"


AttrLike = Union[Attr, Tuple[str, Any]]
AttrsInput = Union[Mapping[str, Any], Iterable[AttrLike]]


def string(key: str, value: str) -> Attr:
    return Attr(key, value, AttrKind.STRING)


def int_(key: str, value: int) -> Attr:
    return Attr(key, value, AttrKind.INT)


def float_(key: str, value: float) -> Attr:
    return Attr(key, value, AttrKind.FLOAT)


def bool_(key: str, value: bool) -> Attr:
    return Attr(key, value, AttrKind.BOOL)


def duration(key: str, value: timedelta) -> Attr:
    return Attr(key, value, AttrKind.DURATION)


def time(key: str, value: datetime) -> Attr:
    return Attr(key, value, AttrKind.TIME)


def group(key: str, *attrs: AttrLike) -> Attr:
    return Attr(key, AttrGroup(attrs_from(attrs)), AttrKind.GROUP)


def any_(key: str, value: Any) -> Attr:
    """値の型から種別を推定して Attr を作成する。"""
    # bool は int のサブクラス
    if isinstance(value, bool):
        return bool_(key, value)
    if isinstance(value, int):
        return int_(key, value)
    if isinstance(value, float):
        return float_(key, value)
    if isinstance(value, str):
        return string(key, value)
    if isinstance(value, timedelta):
        return duration(key, value)
    if isinstance(value, datetime):
        return time(key, value)
    if isinstance(value, AttrGroup):
        return Attr(key, value, AttrKind.GROUP)
    return Attr(key, value, AttrKind.ANY)


def _to_attr(item: Any) -> Attr:
    if isinstance(item, Attr):
        return item
    if isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str):
        return any_(item[0], item[1])
    # 不正な要素は例外にせず BAD_KEY の下に値ごと残す
    return any_(BAD_KEY, item)


def attrs_from(items: AttrsInput) -> tuple[Attr, ...]:
    """Mapping、Attr、(key, value) の組を Attr のタプルに正規化する。

    Mapping は挿入順に展開する。組として解釈できない要素（str 単体など）は
    分解せずに "!BADKEY" キーの属性とする。
    """
    if isinstance(items, Mapping):
        return tuple(any_(str(k), v) for k, v in items.items())
    if isinstance(items, (str, bytes)):
        return (any_(BAD_KEY, items),)
    return tuple(_to_attr(item) for item in items)
