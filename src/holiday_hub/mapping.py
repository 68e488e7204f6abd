from enum import Enum
from typing import Dict, Tuple

from .holiday import Country, Subdivision
from .utils import _norm_code


class SourceKind(str, Enum):
    REMOTE = "remote"
    RULE_BASED = "rule_based"


INDIA = Country(code="IN", name="India")

INDIA_STATES: Tuple[Subdivision, ...] = (
    Subdivision("AN", "Andaman and Nicobar Islands"),
    Subdivision("AP", "Andhra Pradesh"),
    Subdivision("AR", "Arunachal Pradesh"),
    Subdivision("AS", "Assam"),
    Subdivision("BR", "Bihar"),
    Subdivision("CH", "Chandigarh"),
    Subdivision("CT", "Chhattisgarh"),
    Subdivision("DL", "Delhi"),
    Subdivision("GA", "Goa"),
    Subdivision("GJ", "Gujarat"),
    Subdivision("HP", "Himachal Pradesh"),
    Subdivision("HR", "Haryana"),
    Subdivision("JH", "Jharkhand"),
    Subdivision("JK", "Jammu and Kashmir"),
    Subdivision("KA", "Karnataka"),
    Subdivision("KL", "Kerala"),
    Subdivision("MP", "Madhya Pradesh"),
    Subdivision("MH", "Maharashtra"),
    Subdivision("MN", "Manipur"),
    Subdivision("ML", "Meghalaya"),
    Subdivision("MZ", "Mizoram"),
    Subdivision("NL", "Nagaland"),
    Subdivision("OR", "Odisha"),
    Subdivision("PB", "Punjab"),
    Subdivision("PY", "Puducherry"),
    Subdivision("RJ", "Rajasthan"),
    Subdivision("SK", "Sikkim"),
    Subdivision("TN", "Tamil Nadu"),
    Subdivision("TS", "Telangana"),
    Subdivision("TR", "Tripura"),
    Subdivision("UP", "Uttar Pradesh"),
    Subdivision("UT", "Uttarakhand"),
    Subdivision("WB", "West Bengal"),
)


# Countries served by something other than the rule tables:
# code -> (source kind, country entry, static state table).
# Every code not listed here goes to the rule-based source.
SOURCE_CODES: Dict[str, Tuple[SourceKind, Country, Tuple[Subdivision, ...]]] = {
    "IN": (SourceKind.REMOTE, INDIA, INDIA_STATES),
}


def select_source(country_code: str) -> SourceKind:
    """
    Source-selection policy: which kind of source serves ``country_code``.

    Parameters
    ----------
    country_code: str
        ISO 3166-1 alpha-2 code, any case.

    Returns
    -------
    SourceKind
        The kind registered in SOURCE_CODES, RULE_BASED for unlisted codes.
    """
    entry = SOURCE_CODES.get(_norm_code(country_code))
    return entry[0] if entry is not None else SourceKind.RULE_BASED
