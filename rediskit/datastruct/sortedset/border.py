"""Score borders for range queries such as ZRANGEBYSCORE."""

from __future__ import annotations

import math
from dataclasses import dataclass

_NEGATIVE_INF = -1
_POSITIVE_INF = 1

_NOT_A_FLOAT = "ERR min or max is not a float"
_INF_WORDS = frozenset({"inf", "infinity"})


@dataclass(frozen=True)
class ScoreBorder:
    """One end of a score range: a value, exclusive or not, or an infinity."""

    inf: int = 0
    value: float = 0.0
    exclude: bool = False

    def greater(self, value: float) -> bool:
        """Return whether ``value`` lies within this border used as a maximum."""
        if self.inf == _NEGATIVE_INF:
            return False
        if self.inf == _POSITIVE_INF:
            return True
        if self.exclude:
            return self.value > value
        return self.value >= value

    def less(self, value: float) -> bool:
        """Return whether ``value`` lies within this border used as a minimum."""
        if self.inf == _NEGATIVE_INF:
            return True
        if self.inf == _POSITIVE_INF:
            return False
        if self.exclude:
            return self.value < value
        return self.value <= value


_POSITIVE_INF_BORDER = ScoreBorder(inf=_POSITIVE_INF)
_NEGATIVE_INF_BORDER = ScoreBorder(inf=_NEGATIVE_INF)


def _parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        raise ValueError(_NOT_A_FLOAT)
    try:
        result = float(text)
    except ValueError:
        raise ValueError(_NOT_A_FLOAT) from None
    if math.isinf(result) and text.lstrip("+-").lower() not in _INF_WORDS:
        # out of range for a 64-bit float
        raise ValueError(_NOT_A_FLOAT)
    return result


def parse_score_border(s: str) -> ScoreBorder:
    """Parse a border such as ``2.5``, ``(2.5``, ``+inf`` or ``-inf``.

    Raises ValueError when the text is not a valid border.
    """
    if s in ("inf", "+inf"):
        return _POSITIVE_INF_BORDER
    if s == "-inf":
        return _NEGATIVE_INF_BORDER
    if not s:
        raise ValueError(_NOT_A_FLOAT)
    if s[0] == "(":
        return ScoreBorder(value=_parse_float(s[1:]), exclude=True)
    return ScoreBorder(value=_parse_float(s), exclude=False)