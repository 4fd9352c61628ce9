"""Single-shot HTTP fetch of the results page."""

import logging

import requests
from bs4 import BeautifulSoup

from fightdata.util import (
    DocumentParseError,
    NetworkError,
    NotModifiedError,
    RequestConstructionError,
    UnexpectedStatusError,
)

logger = logging.getLogger(__name__)

RESULTS_URL = "https://vringe.com/results/"
REQUEST_TIMEOUT = 30.0  # seconds

# Mimics a mobile Chrome navigation so the origin does not block us.
# No If-Modified-Since: a 304 would leave us with nothing to parse.
HEADERS = {
    "accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,"
        "image/webp,image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
    ),
    "accept-language": "ru,ru-RU;q=0.9,en-US;q=0.8,en;q=0.7",
    "cache-control": "max-age=0",
    "priority": "u=0, i",
    "referer": "https://www.google.com/",
    "sec-ch-ua": '"Not)A;Brand";v="8", "Chromium";v="138", "Google Chrome";v="138"',
    "sec-ch-ua-mobile": "?1",
    "sec-ch-ua-platform": "Android",
    "sec-fetch-dest": "document",
    "sec-fetch-mode": "navigate",
    "sec-fetch-site": "cross-site",
    "sec-fetch-user": "?1",
    "upgrade-insecure-requests": "1",
    "user-agent": (
        "Mozilla/5.0 (Linux; Android 6.0; Nexus 5 Build/MRA58N) "
        "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/138.0.0.0 "
        "Mobile Safari/537.36"
    ),
}

_CONSTRUCTION_ERRORS = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
    requests.exceptions.InvalidHeader,
)


def fetch_page(url: str, timeout: float = REQUEST_TIMEOUT) -> str:
    """GET a page once and return its body. No retries."""
    logger.debug("Fetching %s", url)
    try:
        resp = requests.get(url, headers=HEADERS, timeout=timeout)
    except _CONSTRUCTION_ERRORS as e:
        raise RequestConstructionError(f"error creating HTTP request for {url}: {e}") from e
    except requests.RequestException as e:
        raise NetworkError(f"error executing HTTP request for {url}: {e}") from e

    try:
        if resp.status_code == 304:
            raise NotModifiedError(
                "resource not modified (304), no new data available"
            )
        if not 200 <= resp.status_code < 300:
            raise UnexpectedStatusError(resp.status_code, resp.reason or "")
        html = resp.text
    finally:
        resp.close()

    logger.debug("OK %s (%d bytes)", url, len(html))
    return html


def parse_document(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "html.parser")
    except Exception as e:
        raise DocumentParseError(f"error parsing HTML document: {e}") from e


def fetch_document(url: str, timeout: float = REQUEST_TIMEOUT) -> BeautifulSoup:
    """Fetch a page and parse it into a BeautifulSoup tree."""
    return parse_document(fetch_page(url, timeout))
