"""エラーチェーンの走査"""

from __future__ import annotations

from typing import Iterator, TypeVar

E = TypeVar("E", bound=BaseException)


def _next(err: BaseException) -> BaseException | None:
    unwrap = getattr(err, "unwrap", None)
    if callable(unwrap):
        return unwrap()
    return err.__cause__


def iter_chain(err: BaseException | None) -> Iterator[BaseException]:
    """err とその下の cause を外側から順に返す。循環していれば打ち切る。"""
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = _next(err)


def is_error(err: BaseException | None, target: BaseException) -> bool:
    """チェーン中に target と同一または等価なエラーがあるかを返す。"""
    return any(e is target or e == target for e in iter_chain(err))


def as_error(err: BaseException | None, cls: type[E]) -> E | None:
    """チェーン中で最初に見つかった cls のインスタンスを返す。"""
    for e in iter_chain(err):
        if isinstance(e, cls):
            return e
    return None
