# app/domain/services/state_codes.py
"""
Jurisdiction resolution for GST place-of-supply decisions.

Decides whether a supply is intra-state (CGST + SGST) or inter-state (IGST)
from state codes, state names and GSTIN prefixes.  When neither side can be
resolved the supply is treated as inter-state.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Mapping

from app.domain.models.billing import JurisdictionInfo

logger = logging.getLogger("state_codes")

_GSTIN_STATE_PREFIX = re.compile(r"^\d{2}$")

# Lower-cased, trimmed state / UT name -> GST state code.
STATE_TO_CODE: Mapping[str, str] = MappingProxyType({
    # Union Territories
    "puducherry": "34",
    "pondicherry": "34",
    "andaman and nicobar islands": "35",
    "andaman & nicobar islands": "35",
    "andaman and nicobar": "35",
    "andaman & nicobar": "35",
    "chandigarh": "04",
    "dadra and nagar haveli and daman and diu": "26",
    "dadra & nagar haveli and daman & diu": "26",
    "dadra and nagar haveli": "26",
    "dadra & nagar haveli": "26",
    "daman and diu": "26",
    "daman & diu": "26",
    "delhi": "07",
    "new delhi": "07",
    "nct of delhi": "07",
    "jammu and kashmir": "01",
    "jammu & kashmir": "01",
    "ladakh": "38",
    "lakshadweep": "31",
    # States
    "andhra pradesh": "37",
    "arunachal pradesh": "12",
    "assam": "18",
    "bihar": "10",
    "chhattisgarh": "22",
    "chattisgarh": "22",
    "goa": "30",
    "gujarat": "24",
    "haryana": "06",
    "himachal pradesh": "02",
    "jharkhand": "20",
    "karnataka": "29",
    "kerala": "32",
    "madhya pradesh": "23",
    "maharashtra": "27",
    "manipur": "14",
    "meghalaya": "17",
    "mizoram": "15",
    "nagaland": "13",
    "odisha": "21",
    "orissa": "21",
    "punjab": "03",
    "rajasthan": "08",
    "sikkim": "11",
    "tamil nadu": "33",
    "tamilnadu": "33",
    "telangana": "36",
    "tripura": "16",
    "uttar pradesh": "09",
    "uttarakhand": "05",
    "uttaranchal": "05",
    "west bengal": "19",
    "other territory": "97",
})


def _clean(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def get_state_code(state_name: str | None, tax_id: str | None = None) -> str | None:
    """Derive a two-digit state code from a GSTIN prefix or a state name.

    The GSTIN wins when its first two characters are digits; otherwise the
    trimmed, lower-cased name is looked up in ``STATE_TO_CODE``.
    Returns ``None`` when neither signal resolves.
    """
    prefix = _clean(tax_id)[:2]
    if _GSTIN_STATE_PREFIX.match(prefix):
        return prefix

    name = _clean(state_name).lower()
    if not name:
        return None
    return STATE_TO_CODE.get(name)


def is_same_jurisdiction(
    state_a: str | None,
    state_b: str | None,
    code_a: str | None,
    code_b: str | None,
    tax_id_a: str | None = None,
    tax_id_b: str | None = None,
) -> bool:
    """Return True when both parties sit in the same GST jurisdiction.

    First matching rule decides:

    1. both explicit state codes present and equal
    2. both state names present and equal (case/whitespace-insensitive)
    3. derived codes (explicit code, else GSTIN prefix, else name table)
       present and equal

    Anything unresolved is a different jurisdiction.
    """
    c1 = _clean(code_a)
    c2 = _clean(code_b)
    if c1 and c2 and c1 == c2:
        return True

    n1 = _clean(state_a).lower()
    n2 = _clean(state_b).lower()
    if n1 and n2 and n1 == n2:
        return True

    d1 = c1 or get_state_code(n1, tax_id_a)
    d2 = c2 or get_state_code(n2, tax_id_b)
    if d1 is None or d2 is None:
        logger.debug(
            "state_codes: unresolved jurisdiction (%r/%r vs %r/%r), assuming inter-state",
            state_a, code_a, state_b, code_b,
        )
        return False
    return d1 == d2


def resolve_intra_state(seller: JurisdictionInfo, buyer: JurisdictionInfo) -> bool:
    """Apply ``is_same_jurisdiction`` to two parties."""
    return is_same_jurisdiction(
        seller.state_name,
        buyer.state_name,
        seller.state_code,
        buyer.state_code,
        seller.tax_id,
        buyer.tax_id,
    )
