"""
Asset downloader: retrieves the binary resource referenced by an
extracted field (the profile image) and streams it to disk.
Failures here never touch the JSON result.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import requests

from crawler.core import USER_AGENT, REQUEST_TIMEOUT, DOWNLOAD_CHUNK_SIZE, logger

IMAGE_SUFFIX = ".jpg"

class DownloadFailureKind(Enum):
    CONNECTION = "CONNECTION"
    HTTP_STATUS = "HTTP_STATUS"
    IO = "IO"

@dataclass(frozen=True)
class DownloadFailure:
    url: str
    kind: DownloadFailureKind
    message: str
    http_status: Optional[int] = None

    def __str__(self):
        return f"failed to download {self.url}: {self.message}"

def asset_path(identifier: str, directory=".") -> Path:
    """Image file is named after the input identifier, not the extracted profile name."""
    return Path(directory) / f"{identifier}{IMAGE_SUFFIX}"

def partial_path(destination: Path) -> Path:
    return destination.with_name(f".{destination.name}.part")

def _discard(part: Path):
    try:
        part.unlink()
    except FileNotFoundError:
        pass

def download_asset(url, destination, session=None) -> Union[Path, DownloadFailure]:
    """
    Fetch url and stream the body to destination (created or replaced).
    A failed download leaves any existing destination file untouched.
    Only HTTP 200 counts as success.
    """
    http = session or requests
    destination = Path(destination)

    try:
        r = http.get(
            url,
            timeout=REQUEST_TIMEOUT,
            headers={"User-Agent": USER_AGENT},
            stream=True,
        )
    except requests.exceptions.RequestException as e:
        return DownloadFailure(url, DownloadFailureKind.CONNECTION, f"request error: {e}")

    try:
        if r.status_code != 200:
            return DownloadFailure(
                url, DownloadFailureKind.HTTP_STATUS, f"status code: {r.status_code}", http_status=r.status_code
            )
        # Body goes to a sibling temp file; destination is only replaced once it is complete
        part = partial_path(destination)
        try:
            with open(part, "wb") as f:
                for chunk in r.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
            os.replace(part, destination)
        # RequestException derives from IOError, so it must be caught first
        except requests.exceptions.RequestException as e:
            _discard(part)
            return DownloadFailure(url, DownloadFailureKind.CONNECTION, f"body read error: {e}")
        except OSError as e:
            _discard(part)
            return DownloadFailure(url, DownloadFailureKind.IO, f"failed to save image to {destination}: {e}")
    finally:
        r.close()

    logger.info(f"Profile image successfully saved as {destination}", extra={"context": "assets"})
    return destination
