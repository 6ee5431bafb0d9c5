import html
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Union

ACRONYMS = frozenset(
    {"AI", "ECG", "IPD", "OPD", "ER", "MRI", "CT", "PFT", "ICD", "BP", "HR", "PR", "QRS", "QT"}
)

CURRENCY_SYMBOL = "₹"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class StatusTier(str, Enum):
    normal = "normal"
    abnormal = "abnormal"
    critical = "critical"


_NORMAL = {"normal", "completed", "paid", "done", "booked", "negative", "fit", "cleared"}
_ABNORMAL = {"abnormal", "high", "low", "pending", "borderline", "due", "overdue", "unpaid"}
_CRITICAL = {"critical", "failed", "panic", "severe"}
_NEGATIONS = {"non", "not", "no"}


def escape(text: Any) -> str:
    """Escape the five HTML metacharacters. None renders as an empty string."""
    if text is None:
        return ""
    return html.escape(str(text), quote=True)


def title_case(key: Optional[str]) -> str:
    """snake_case / camelCase identifier -> 'Title Case', keeping known acronyms upper-case.

    >>> title_case("ecg_results")
    'ECG Results'
    """
    if not key:
        return ""
    spaced = _CAMEL_BOUNDARY.sub(" ", str(key)).replace("_", " ")
    words = []
    for word in spaced.split():
        upper = word.upper()
        if upper in ACRONYMS:
            words.append(upper)
        else:
            words.append(word[:1].upper() + word[1:].lower())
    return " ".join(words)


def _parse_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    # "2026-03-05 10:00" variants with a trailing time we cannot read
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def format_date(value: Union[str, date, datetime, None]) -> str:
    """'2026-03-05' -> '5 Mar 2026'. Empty string for missing or unparsable input."""
    parsed = _parse_date(value)
    if parsed is None:
        return ""
    return f"{parsed.day} {parsed.strftime('%b')} {parsed.year}"


def format_number(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return "" if value is None else str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_currency(amount: Any) -> str:
    if amount is None or amount == "":
        return ""
    try:
        num = float(amount)
    except (TypeError, ValueError):
        return ""
    if num.is_integer():
        return f"{CURRENCY_SYMBOL}{int(num):,}"
    return f"{CURRENCY_SYMBOL}{num:,.2f}"


def classify_status(status: Optional[str]) -> StatusTier:
    """Map a free-text status to a presentation tier. Unknown values are normal.

    Exact matches win. Otherwise a word starting with "critical" or naming a
    critical state makes it critical, then an abnormal word makes it abnormal.
    Words right after "non", "not" or "no" are ignored, so "non-critical" and
    "not high" stay normal.
    """
    s = (status or "").strip().lower()
    if not s:
        return StatusTier.normal
    if s in _NORMAL:
        return StatusTier.normal
    if s in _CRITICAL:
        return StatusTier.critical
    if s in _ABNORMAL:
        return StatusTier.abnormal

    tokens = re.findall(r"[a-z]+", s)
    words = [w for i, w in enumerate(tokens) if not (i and tokens[i - 1] in _NEGATIONS)]
    if any(w.startswith("critical") or w in _CRITICAL for w in words):
        return StatusTier.critical
    if any(w in _ABNORMAL for w in words):
        return StatusTier.abnormal
    return StatusTier.normal
