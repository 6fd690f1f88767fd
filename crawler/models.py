from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from bs4 import BeautifulSoup

class FetchFailureKind(Enum):
    CONNECTION = "CONNECTION"
    HTTP_STATUS = "HTTP_STATUS"
    UNPARSEABLE = "UNPARSEABLE"

@dataclass(frozen=True)
class CrawlResponse:
    """
    Network metadata of a fetched profile page.
    The raw body is not kept here; only the parsed document travels onward.
    """
    url: str
    resolved_url: str
    http_status: int
    content_type: str
    response_headers: Dict[str, str]
    fetch_duration_ms: int

@dataclass(frozen=True)
class ParsedPage:
    """Successful fetch: response metadata plus the parsed document tree."""
    response: CrawlResponse
    document: BeautifulSoup

@dataclass(frozen=True)
class FetchFailure:
    """
    Page fetch outcome when no parsed document could be produced.
    Fatal to the pipeline: extraction never starts.
    """
    url: str
    kind: FetchFailureKind
    message: str
    http_status: Optional[int] = None

    def __str__(self):
        return f"failed to visit {self.url}: {self.message}"
