"""
HTTP fetching module for the crawler.
Fetches one profile page and parses it into a document tree.
Only HTML content is accepted.
"""

import time
from typing import Union

import requests
from bs4 import BeautifulSoup, UnicodeDammit
from bs4.builder import ParserRejectedMarkup

from crawler.core import USER_AGENT, REQUEST_TIMEOUT, logger
from crawler.models import CrawlResponse, FetchFailure, FetchFailureKind, ParsedPage

HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")

def declared_charset(content_type):
    """Charset named in a Content-Type header, or None when it names none."""
    if "charset=" not in content_type:
        return None
    charset = content_type.split("charset=", 1)[1].split(";")[0].strip(" \"'")
    return charset or None

def fetch(url, session=None) -> Union[ParsedPage, FetchFailure]:
    """
    Fetch a URL and classify the outcome.
    Returns a ParsedPage on success, or a FetchFailure describing
    a connection problem, a non-2xx status, or an unparseable body.
    """
    http = session or requests
    logger.info(f"Visiting: {url}", extra={"context": "fetcher"})
    start_time = time.time()

    try:
        r = http.get(
            url,
            timeout=REQUEST_TIMEOUT,
            headers={"User-Agent": USER_AGENT},
            allow_redirects=True,
        )
    except requests.exceptions.Timeout:
        return FetchFailure(url, FetchFailureKind.CONNECTION, f"timeout after {REQUEST_TIMEOUT}s")
    except requests.exceptions.ConnectionError as e:
        return FetchFailure(url, FetchFailureKind.CONNECTION, f"connection error: {e}")
    except requests.exceptions.RequestException as e:
        return FetchFailure(url, FetchFailureKind.CONNECTION, f"request error: {e}")

    fetch_time_ms = int((time.time() - start_time) * 1000)
    ct = r.headers.get("Content-Type", "").lower()

    if not (200 <= r.status_code < 300):
        return FetchFailure(
            url, FetchFailureKind.HTTP_STATUS, f"HTTP {r.status_code}", http_status=r.status_code
        )

    # A missing content type is tolerated; anything else must be HTML
    if ct and not any(t in ct for t in HTML_CONTENT_TYPES):
        return FetchFailure(
            url, FetchFailureKind.UNPARSEABLE, f"unexpected content type: {ct}", http_status=r.status_code
        )

    if not r.content:
        return FetchFailure(url, FetchFailureKind.UNPARSEABLE, "empty body", http_status=r.status_code)

    # Decode the raw bytes ourselves: a header charset is definite, otherwise UTF-8 is
    # tried before <meta charset>, never the ISO-8859-1 default requests gives text/*
    charset = declared_charset(ct)
    dammit = UnicodeDammit(
        r.content,
        known_definite_encodings=[charset] if charset else [],
        user_encodings=["utf-8"],
        is_html=True,
    )
    if dammit.unicode_markup is None:
        return FetchFailure(url, FetchFailureKind.UNPARSEABLE, "undecodable body", http_status=r.status_code)

    try:
        document = BeautifulSoup(dammit.unicode_markup, "html.parser")
    except ParserRejectedMarkup as e:
        return FetchFailure(url, FetchFailureKind.UNPARSEABLE, f"parser rejected markup: {e}", http_status=r.status_code)

    response = CrawlResponse(
        url=url,
        resolved_url=r.url or url,
        http_status=r.status_code,
        content_type=ct,
        response_headers=dict(r.headers),
        fetch_duration_ms=fetch_time_ms,
    )
    return ParsedPage(response=response, document=document)
