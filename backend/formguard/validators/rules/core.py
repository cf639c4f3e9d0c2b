"""Core rules: the methods jQuery Validation ships in its main bundle.

Every rule has the signature ``rule(value, params=None, data=None)`` where
``value`` is the field's string value, ``params`` is whatever the ruleset
declares for the rule, and ``data`` is the dataset snapshot of the current
validation pass. A falsy return (or ``RuleResult(passed=False)``) is a failure.
"""

import re
from typing import Any, Mapping, Optional

from dateutil import parser as date_parser

Data = Optional[Mapping[str, str]]

NUMBER_RE = re.compile(r"^-?(?:\d+|\d{1,3}(?:,\d{3})+)(?:\.\d+)?$")
DIGITS_RE = re.compile(r"^[0-9]+$")
DATEISO_RE = re.compile(r"^\d{4}[/-]\d{1,2}[/-]\d{1,2}$")
EMAIL_RE = re.compile(r"^.+@[a-z0-9._-]+\.(xn--)?[a-z0-9]{2,}$", re.IGNORECASE)
TAG_RE = re.compile(r"<[^>]+>")

# URL expression from jQuery Validation 1.10, assembled from its parts.
_UCS = "%s-%s%s-%s%s-%s" % tuple(map(chr, (0x00A0, 0xD7FF, 0xF900, 0xFDCF, 0xFDF0, 0xFFEF)))
_PRIVATE_USE = "[%s-%s]" % (chr(0xE000), chr(0xF8FF))
_UNRESERVED = r"[a-z\d\-._~" + _UCS + "]"
_ALNUM = r"[a-z\d" + _UCS + "]"
_ALPHA = r"[a-z" + _UCS + "]"
_PCT = r"%[\da-f]{2}"
_SUB_DELIMS = r"[!$&'()*+,;=]"
_OCTET = r"(?:\d|[1-9]\d|1\d\d|2[0-4]\d|25[0-5])"
_IPV4 = r"\.".join([_OCTET] * 4)
_DOMAIN_LABEL = "(?:" + _ALNUM + "|" + _ALNUM + _UNRESERVED + "*" + _ALNUM + ")"
_TOP_LABEL = "(?:" + _ALPHA + "|" + _ALPHA + _UNRESERVED + "*" + _ALPHA + ")"
_HOST = "(?:" + _IPV4 + "|(?:" + _DOMAIN_LABEL + r"\.)+" + _TOP_LABEL + r"\.?)"
_USERINFO = "(?:(?:" + _UNRESERVED + "|" + _PCT + "|" + _SUB_DELIMS + "|:)*@)?"
_PCHAR = "(?:" + _UNRESERVED + "|" + _PCT + "|" + _SUB_DELIMS + "|:|@)"
_PATH = "(?:/(?:" + _PCHAR + "+(?:/" + _PCHAR + "*)*)?)?"
_QUERY = r"(?:\?(?:" + _PCHAR + "|" + _PRIVATE_USE + r"|/|\?)*)?"
_FRAGMENT = r"(?:#(?:" + _PCHAR + r"|/|\?)*)?"
URL_RE = re.compile(
    r"^(?:https?|ftp)://" + _USERINFO + _HOST + r"(?::\d*)?" + _PATH + _QUERY + _FRAGMENT + "$",
    re.IGNORECASE,
)


# ── Helpers ──


def byte_length(value: str) -> int:
    """Length as PHP's strlen() and the byte-counting client see it."""
    return len(value.encode("utf-8", "surrogatepass"))


def strip_tags(value: str) -> str:
    return TAG_RE.sub("", value)


def as_number(params: Any, default: float = 0.0) -> float:
    """Numeric value of a rule parameter; unusable params count as ``default``."""
    if isinstance(params, str):
        params = params.replace(",", "")
    try:
        return float(params)
    except (TypeError, ValueError):
        return default


def as_bounds(params: Any) -> tuple[float, float]:
    """(low, high) from a two-element array; empty params mean [0, 0]."""
    if not params:
        return 0.0, 0.0
    if not isinstance(params, (list, tuple)):
        params = [params]
    padded = list(params) + [0, 0]
    return as_number(padded[0]), as_number(padded[1])


# ── Full support ──


def required(value: str, params: Any = None, data: Data = None) -> bool:
    # "0" is a valid value for a required field
    return value != ""


def minlength(value: str, params: Any = 0, data: Data = None) -> bool:
    return byte_length(value) >= as_number(params)


def maxlength(value: str, params: Any = 0, data: Data = None) -> bool:
    return byte_length(value) <= as_number(params)


def rangelength(value: str, params: Any = None, data: Data = None) -> bool:
    low, high = as_bounds(params)
    length = byte_length(value)
    return low <= length <= high


def number(value: str, params: Any = None, data: Data = None) -> bool:
    return NUMBER_RE.search(value) is not None


def digits(value: str, params: Any = None, data: Data = None) -> bool:
    return DIGITS_RE.search(value) is not None


def min_(value: str, params: Any = None, data: Data = None) -> bool:
    return number(value) and as_number(value) >= as_number(params)


def max_(value: str, params: Any = None, data: Data = None) -> bool:
    return number(value) and as_number(value) <= as_number(params)


def range_(value: str, params: Any = None, data: Data = None) -> bool:
    low, high = as_bounds(params)
    return number(value) and low <= as_number(value) <= high


def dateiso(value: str, params: Any = None, data: Data = None) -> bool:
    return DATEISO_RE.search(value) is not None


def creditcard(value: str, params: Any = None, data: Data = None) -> bool:
    """Luhn checksum over the digits, dashes ignored."""
    value = value.replace("-", "")
    if not digits(value):
        return False

    checksum = 0
    even = False
    for char in reversed(value):
        digit = int(char)
        if even:
            digit *= 2
            if digit > 9:
                digit -= 9
        checksum += digit
        even = not even

    return checksum % 10 == 0


# ── Partial support ──


def url(value: str, params: Any = None, data: Data = None) -> bool:
    return URL_RE.search(value) is not None


def email(value: str, params: Any = None, data: Data = None) -> bool:
    return EMAIL_RE.search(value) is not None


def _ignore_timezone(name: Optional[str], offset: Optional[int]) -> None:
    # Only parseability matters; unknown zone names ("10:00 XYZ") must not warn or raise
    return None


def date(value: str, params: Any = None, data: Data = None) -> bool:
    """Anything a lenient free-form date parser accepts.

    Single characters always fail: parsers read them as timezone letters.
    Relative words (``now``, ``tomorrow``) are not dates here.
    """
    if len(value) <= 1:
        return False
    try:
        date_parser.parse(value, tzinfos=_ignore_timezone)
    except (ValueError, OverflowError):
        return False
    return True


def equalto(value: str, params: Any = None, data: Data = None) -> bool:
    """Compare against another field, referenced by ID selector (``#Field``).

    Only ID selectors whose ID equals the field name are supported.
    """
    key = str(params or "")
    if key.startswith("#"):
        key = key[1:]
    return data is not None and key in data and data[key] == value


def accept(value: str, params: Any = None, data: Data = None) -> bool:
    # The client checks MIME types here; uploads are handled elsewhere.
    return True


CORE_RULES = {
    "required": required,
    "minlength": minlength,
    "maxlength": maxlength,
    "rangelength": rangelength,
    "min": min_,
    "max": max_,
    "range": range_,
    "number": number,
    "digits": digits,
    "dateiso": dateiso,
    "creditcard": creditcard,
    "url": url,
    "email": email,
    "date": date,
    "equalto": equalto,
    "accept": accept,
}
