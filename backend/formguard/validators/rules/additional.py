"""Additional rules — the jQuery Validation additional-methods bundle.

Not supported: ziprange, zipcodeUS, vinUS, dateITA, dateNL, phonesUK, email2,
url2, creditcardtypes, ipv4, ipv6, pattern, require_from_group,
skip_or_fill_minimum.
"""

import re
from typing import Any

import structlog

from formguard.validators.models import RuleResult
from formguard.validators.rules.core import Data, as_bounds, as_number, byte_length, strip_tags

logger = structlog.get_logger()

WORD_RE = re.compile(r"\b\w+\b")
LETTERS_ONLY_RE = re.compile(r"^[a-z]+$", re.IGNORECASE)
LETTERS_WITH_BASIC_PUNC_RE = re.compile(r"^[a-z\-.,()'\"\s]+$", re.IGNORECASE)
ALPHANUMERIC_RE = re.compile(r"^\w+$")
NO_WHITESPACE_RE = re.compile(r"^\S+$")
INTEGER_RE = re.compile(r"^-?\d+$")
TIME24H_RE = re.compile(r"^([0-1]\d|2[0-3]):([0-5]\d)$")
TIME12H_RE = re.compile(r"^((0?[1-9]|1[012])(:[0-5]\d){0,2}( [AP]M))$", re.IGNORECASE)

PHONE_US_RE = re.compile(r"^(\+?1-?)?(\([2-9]\d{2}\)|[2-9]\d{2})-?[2-9]\d{2}-?\d{4}$")
PHONE_UK_RE = re.compile(
    r"^(?:(?:(?:00\s?|\+)44\s?)|(?:\(?0))(?:(?:\d{5}\)?\s?\d{4,5})|"
    r"(?:\d{4}\)?\s?(?:\d{5}|\d{3}\s?\d{3}))|(?:\d{3}\)?\s?\d{3}\s?\d{3,4})|"
    r"(?:\d{2}\)?\s?\d{4}\s?\d{4}))$"
)
MOBILE_UK_RE = re.compile(r"^(?:(?:(?:00\s?|\+)44\s?|0)7(?:[45789]\d{2}|624)\s?\d{3}\s?\d{3})$")

# Permitted letters depend on their position in the postcode
_ALPHA1 = "[abcdefghijklmnoprstuwyz]"
_ALPHA2 = "[abcdefghklmnopqrstuvwxy]"
_ALPHA3 = "[abcdefghjkstuw]"
_ALPHA4 = "[abehmnprvwxy]"
_ALPHA5 = "[abdefghjlnpqrstuwxyz]"
_INWARD = "([0-9]" + _ALPHA5 + "{2})"

POSTCODE_PATTERNS = [
    # AN NAA, ANN NAA, AAN NAA, AANN NAA
    re.compile("^(" + _ALPHA1 + _ALPHA2 + "?[0-9]{1,2})" + _INWARD + "$"),
    # ANA NAA
    re.compile("^(" + _ALPHA1 + "[0-9]" + _ALPHA3 + ")" + _INWARD + "$"),
    # AANA NAA
    re.compile("^(" + _ALPHA1 + _ALPHA2 + "[0-9]" + _ALPHA4 + ")" + _INWARD + "$"),
    # GIR 0AA
    re.compile("^(gir)(0aa)$"),
    # BFPO
    re.compile("^(bfpo)([0-9]{1,4})$"),
    # BFPO c/o
    re.compile("^(bfpo)(c/o[0-9]{1,3})$"),
]


def _int(params: Any) -> int:
    return int(as_number(params))


def _word_count(value: str) -> int:
    return len(WORD_RE.findall(strip_tags(value)))


def maxwords(value: str, params: Any = None, data: Data = None) -> bool:
    return _word_count(value) <= _int(params)


def minwords(value: str, params: Any = None, data: Data = None) -> bool:
    return _word_count(value) >= _int(params)


def rangewords(value: str, params: Any = None, data: Data = None) -> bool:
    low, high = as_bounds(params)
    return low <= _word_count(value) <= high


def lettersonly(value: str, params: Any = None, data: Data = None) -> bool:
    return LETTERS_ONLY_RE.search(value) is not None


def letterswithbasicpunc(value: str, params: Any = None, data: Data = None) -> bool:
    return LETTERS_WITH_BASIC_PUNC_RE.search(value) is not None


def alphanumeric(value: str, params: Any = None, data: Data = None) -> bool:
    return ALPHANUMERIC_RE.search(value) is not None


def nowhitespace(value: str, params: Any = None, data: Data = None) -> bool:
    return NO_WHITESPACE_RE.search(value) is not None


def integer(value: str, params: Any = None, data: Data = None) -> bool:
    return INTEGER_RE.search(value) is not None


def time24h(value: str, params: Any = None, data: Data = None) -> bool:
    return TIME24H_RE.search(value) is not None


def time12h(value: str, params: Any = None, data: Data = None) -> bool:
    return TIME12H_RE.search(value) is not None


def phoneus(value: str, params: Any = None, data: Data = None) -> bool:
    phone_number = re.sub(r"\s", "", value)
    return len(phone_number) > 9 and PHONE_US_RE.search(phone_number) is not None


def phoneuk(value: str, params: Any = None, data: Data = None) -> bool:
    phone_number = re.sub(r"\(|\)|\s+|-", "", value)
    return len(phone_number) > 9 and PHONE_UK_RE.search(phone_number) is not None


def mobileuk(value: str, params: Any = None, data: Data = None) -> bool:
    phone_number = re.sub(r"\s+|-", "", value)
    return len(phone_number) > 9 and MOBILE_UK_RE.search(phone_number) is not None


def postcode(value: str, params: Any = None, data: Data = None) -> RuleResult:
    """UK postcode, including GIR 0AA and BFPO numbers.

    A valid postcode comes back reformatted as ``OUTWARD INWARD`` in upper
    case (``BFPO c/o 123`` keeps its lowercase ``c/o``).
    """
    candidate = value.lower().replace(" ", "")

    for pattern in POSTCODE_PATTERNS:
        match = pattern.search(candidate)
        if match:
            formatted = f"{match.group(1)} {match.group(2)}".upper()
            formatted = formatted.replace("C/O", "c/o ")
            return RuleResult(passed=True, value=formatted)

    return RuleResult(passed=False)


def strippedminlength(value: str, params: Any = None, data: Data = None) -> bool:
    return byte_length(strip_tags(value)) >= as_number(params)


def extension(value: str, params: Any = None, data: Data = None) -> bool:
    """File name ends with one of the listed extensions.

    ``params`` is a pipe- or comma-separated list (``"txt|pdf"``); anything
    else means the image default ``png|jpe?g|gif``.
    """
    extensions = params.replace(",", "|") if isinstance(params, str) else "png|jpe?g|gif"
    try:
        return re.search(".(" + extensions + ")$", value, re.IGNORECASE) is not None
    except re.error as e:
        logger.warning("extension_pattern_invalid", extensions=extensions, error=str(e))
        return False


ADDITIONAL_RULES = {
    "maxwords": maxwords,
    "minwords": minwords,
    "rangewords": rangewords,
    "lettersonly": lettersonly,
    "letterswithbasicpunc": letterswithbasicpunc,
    "alphanumeric": alphanumeric,
    "nowhitespace": nowhitespace,
    "integer": integer,
    "time24h": time24h,
    "time12h": time12h,
    "phoneus": phoneus,
    "phoneuk": phoneuk,
    "mobileuk": mobileuk,
    "postcode": postcode,
    "strippedminlength": strippedminlength,
    "extension": extension,
}
