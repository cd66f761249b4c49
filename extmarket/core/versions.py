"""Dotted version parsing, truncation, and comparison.

Platform bounds in the catalog are often less precise than the host's own
version: a release declaring ``platformMax = "9"`` must still admit a host
running ``9.1.5``.  Comparisons against platform bounds therefore truncate
both sides to the shorter component count before comparing, so ``"9"`` and
``"9.1.5"`` compare as ``"9"`` and ``"9"``.

Truncation implements prefix compatibility; zero padding would not
(``9.1.5 > 9.0.0``).  Release-to-release comparisons (update detection) are
*not* truncated, see :func:`version_key`.
"""

from __future__ import annotations

import operator as _op
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from extmarket.core.errors import InvalidVersionError

_OPERATORS: dict[str, Callable[[tuple[int, ...], tuple[int, ...]], bool]] = {
    "<": _op.lt,
    "<=": _op.le,
    "=": _op.eq,
    "==": _op.eq,
    ">=": _op.ge,
    ">": _op.gt,
    "!=": _op.ne,
    "<>": _op.ne,
}


def version_key(version: str | None) -> tuple[int, ...]:
    """Parse a dotted version into an integer tuple suitable for ordering.

    ``None`` parses to the empty tuple, which sorts below every real
    version.  A missing trailing component also sorts lower, so
    ``version_key("5.1") < version_key("5.1.0")``.

    Raises
    ------
    InvalidVersionError
        If any component is empty or not made of digits.
    """
    if version is None:
        return ()
    parts = version.strip().split(".")
    if not all(p.isdecimal() and p.isascii() for p in parts):
        raise InvalidVersionError(f"Not a dotted numeric version: {version!r}")
    return tuple(int(p) for p in parts)


def normalize_versions(first: str, second: str) -> tuple[str, str]:
    """Truncate both versions to the component count of the shorter one.

    >>> normalize_versions("5.1.2.3", "5.1")
    ('5.1', '5.1')
    >>> normalize_versions("5.2.6.5", "5.1")
    ('5.2', '5.1')
    """
    a = first.split(".")
    b = second.split(".")
    length = min(len(a), len(b))
    return ".".join(a[:length]), ".".join(b[:length])


def compare(first: str | None, second: str | None, operator: str) -> bool:
    """Normalize both versions, then compare them with *operator*.

    When either side is ``None`` normalization is skipped and the absent
    side compares as the empty version.  Callers checking optional
    platform bounds test for presence before calling.

    >>> compare("5.1.2.3", "5.1", "=")
    True
    >>> compare("9.5", "9", ">")
    False
    """
    try:
        fn = _OPERATORS[operator]
    except KeyError:
        raise ValueError(f"Unsupported comparison operator: {operator!r}") from None

    if first is not None and second is not None:
        first, second = normalize_versions(first, second)
    return fn(version_key(first), version_key(second))


class PlatformVersion(BaseModel):
    """The host application's own version as a non-empty integer sequence.

    Examples
    --------
    >>> v = PlatformVersion.parse("10.2.1")
    >>> v.components
    (10, 2, 1)
    >>> str(v)
    '10.2.1'
    """

    model_config = ConfigDict(frozen=True)

    components: tuple[int, ...]

    @classmethod
    def parse(cls, value: str) -> PlatformVersion:
        components = version_key(value)
        if not components:
            raise InvalidVersionError("Platform version must not be empty.")
        return cls(components=components)

    def __str__(self) -> str:
        return ".".join(str(c) for c in self.components)
