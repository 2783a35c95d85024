"""
BSE India market data client.

Three undocumented endpoints of the exchange website are used:

- ``getScripHeaderData`` - last traded price and day range (nested
  ``CurrRate`` / ``Header`` / ``Cmpname`` objects, all values strings)
- ``ComHeadernew`` - EPS, P/E, P/B, ROE and classification (flat strings)
- ``getQouteSearch.aspx`` - HTML snippet for the site's search box

The API rejects requests that do not look like they come from the
website, so every call carries a browser header set.
"""

import logging
from typing import Any, Optional

import requests

from bse_portfolio.core.exceptions import VendorError
from bse_portfolio.core.parsing import parse_mandatory, parse_optional, text_or_empty
from bse_portfolio.core.timezone import now_india
from bse_portfolio.domain.views import PriceSnapshot, FundamentalsSnapshot

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.bseindia.com/BseIndiaAPI/api"
DEFAULT_SEARCH_URL = "https://api.bseindia.com/Msource/1D/getQouteSearch.aspx"

BROWSER_HEADERS = {
    "accept": "application/json, text/plain, */*",
    "accept-language": "en-GB,en-US;q=0.9,en;q=0.8",
    "origin": "https://www.bseindia.com",
    "priority": "u=1, i",
    "referer": "https://www.bseindia.com/",
    "sec-ch-ua": '"Google Chrome";v="143", "Chromium";v="143", "Not A(Brand";v="24"',
    "sec-ch-ua-mobile": "?0",
    "sec-ch-ua-platform": '"Windows"',
    "sec-fetch-dest": "empty",
    "sec-fetch-mode": "cors",
    "sec-fetch-site": "same-site",
    "user-agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/143.0.0.0 Safari/537.36"
    ),
}


def _section(payload: dict[str, Any], name: str) -> dict[str, Any]:
    """Nested vendor object, or an empty dict when missing or null."""
    value = payload.get(name)
    return value if isinstance(value, dict) else {}


def map_price_payload(scripcode: str, payload: Any) -> PriceSnapshot:
    """
    Map a getScripHeaderData response to a PriceSnapshot.

    Raises VendorError when the payload carries no usable traded price.
    """
    if not isinstance(payload, dict):
        raise VendorError(f"Unexpected price payload for {scripcode}: {type(payload).__name__}")

    curr_rate = _section(payload, "CurrRate")
    header = _section(payload, "Header")
    company = _section(payload, "Cmpname")

    current_price = parse_optional(curr_rate.get("LTP"))
    if current_price is None:
        current_price = parse_optional(header.get("LTP"))
    if current_price is None or current_price <= 0:
        raise VendorError(f"No traded price in payload for {scripcode}")

    return PriceSnapshot(
        scripcode=scripcode,
        company_name=text_or_empty(company.get("FullN")) or text_or_empty(company.get("ShortN")),
        current_price=current_price,
        previous_close=parse_mandatory(header.get("PrevClose")),
        open=parse_mandatory(header.get("Open")),
        high=parse_mandatory(header.get("High")),
        low=parse_mandatory(header.get("Low")),
        change=parse_mandatory(curr_rate.get("Chg")),
        change_percent=parse_mandatory(curr_rate.get("PcChg")),
        last_updated=text_or_empty(header.get("Ason")) or now_india().isoformat(),
    )


def map_fundamentals_payload(scripcode: str, payload: Any) -> FundamentalsSnapshot:
    """Map a ComHeadernew response to a FundamentalsSnapshot."""
    if not isinstance(payload, dict):
        raise VendorError(f"Unexpected fundamentals payload for {scripcode}: {type(payload).__name__}")

    return FundamentalsSnapshot(
        scripcode=scripcode,
        security_id=text_or_empty(payload.get("SecurityId")),
        isin=text_or_empty(payload.get("ISIN")),
        sector=text_or_empty(payload.get("Sector")) or text_or_empty(payload.get("IndustryNew")),
        industry=text_or_empty(payload.get("Industry")) or text_or_empty(payload.get("ISubGroup")),
        face_value=parse_mandatory(payload.get("FaceVal")),
        eps=parse_optional(payload.get("EPS")),
        ceps=parse_optional(payload.get("CEPS")),
        pe=parse_optional(payload.get("PE")),
        pb=parse_optional(payload.get("PB")),
        roe=parse_optional(payload.get("ROE")),
        opm=parse_optional(payload.get("OPM")),
        npm=parse_optional(payload.get("NPM")),
        group=text_or_empty(payload.get("Group")),
        index=text_or_empty(payload.get("Index")),
    )


class BseIndiaClient:
    """HTTP client for the BSE India website API."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        api_base_url: str = DEFAULT_API_BASE_URL,
        search_url: str = DEFAULT_SEARCH_URL,
        timeout: Optional[float] = None,
    ):
        self._session = session or requests.Session()
        self._session.headers.update(BROWSER_HEADERS)
        self._api_base_url = api_base_url.rstrip("/")
        self._search_url = search_url
        self._timeout = timeout

    def _get(self, url: str, params: dict[str, str]) -> requests.Response:
        response = self._session.get(url, params=params, timeout=self._timeout)
        if not response.ok:
            raise VendorError(
                f"BSE API error: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )
        return response

    def get_price(self, scripcode: str) -> PriceSnapshot:
        """Fetch the current price snapshot for a scrip code."""
        response = self._get(
            f"{self._api_base_url}/getScripHeaderData/w",
            {"Debtflag": "", "scripcode": scripcode, "seriesid": ""},
        )
        return map_price_payload(scripcode, response.json())

    def get_fundamentals(self, scripcode: str) -> FundamentalsSnapshot:
        """Fetch valuation ratios for a scrip code."""
        response = self._get(
            f"{self._api_base_url}/ComHeadernew/w",
            {"quotetype": "EQ", "scripcode": scripcode, "seriesid": ""},
        )
        return map_fundamentals_payload(scripcode, response.json())

    def search_symbol(self, symbol: str) -> str:
        """Return the search-box HTML for a free-text symbol."""
        response = self._get(
            self._search_url,
            {"Type": "EQ", "text": symbol, "flag": "site"},
        )
        return response.text

    def close(self) -> None:
        self._session.close()
