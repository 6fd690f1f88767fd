"""
FILE DESCRIPTION: Orchestrates the profile pipeline for one identifier, and a bounded
worker pool for several.
FLOW: fetch -> extract -> validate -> write JSON -> (optional) download image.
Fetch, validation and JSON write failures stop the session; an image download
failure is reported and the session still completes.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Union

import requests

from crawler.core import MAX_WORKERS, logger, profile_url
from crawler.fetcher import fetch
from crawler.models import FetchFailure
from extraction.extractor import ProfileExtractor
from extraction.models import ProfileRecord, ValidationFailure
from extraction.validator import validate
from persistence.assets import DownloadFailure, asset_path, download_asset
from persistence.serializer import WriteFailure, save_record

class SessionStage(Enum):
    FETCH = "FETCH"
    VALIDATION = "VALIDATION"
    WRITE = "WRITE"

@dataclass
class SessionReport:
    """Outcome of one identifier's run. ok means the JSON result was written."""
    identifier: str
    url: str
    record: Optional[ProfileRecord] = None
    result_file: Optional[Path] = None
    image_file: Optional[Path] = None
    failure: Optional[Union[FetchFailure, ValidationFailure, WriteFailure]] = None
    failed_stage: Optional[SessionStage] = None
    image_failure: Optional[DownloadFailure] = None

    @property
    def ok(self) -> bool:
        return self.result_file is not None

class ProfileCrawlSession:
    """
    Runs the pipeline for a single profile. Holds no per-profile state between
    runs, so one instance may serve one identifier at a time on any thread.
    """

    def __init__(self, output_dir=".", extractor: Optional[ProfileExtractor] = None, http=None):
        self.output_dir = Path(output_dir)
        self.extractor = extractor or ProfileExtractor()
        self.http = http

    def run(self, identifier: str) -> SessionReport:
        ctx = {"context": identifier}
        url = profile_url(identifier)
        report = SessionReport(identifier=identifier, url=url)

        # 1. Fetch
        page = fetch(url, session=self.http)
        if isinstance(page, FetchFailure):
            return self._fail(report, SessionStage.FETCH, page, "Error during crawling")

        # 2. Extract + validate
        record = self.extractor.extract(page.document)
        validated = validate(record)
        if isinstance(validated, ValidationFailure):
            return self._fail(report, SessionStage.VALIDATION, validated, "Error during crawling")
        report.record = validated

        # 3. Persist JSON
        written = save_record(validated, self.output_dir)
        if isinstance(written, WriteFailure):
            return self._fail(report, SessionStage.WRITE, written, "Failed to save result")
        report.result_file = written

        # 4. Image (non-fatal)
        if validated.profile_image_url:
            destination = asset_path(identifier, self.output_dir)
            downloaded = download_asset(validated.profile_image_url, destination, session=self.http)
            if isinstance(downloaded, DownloadFailure):
                report.image_failure = downloaded
                logger.warning(f"Failed to download profile image: {downloaded}", extra=ctx)
            else:
                report.image_file = downloaded
        else:
            logger.info("No profile image found, skipping download", extra=ctx)

        return report

    @staticmethod
    def _fail(report: SessionReport, stage: SessionStage, failure, prefix: str) -> SessionReport:
        report.failure = failure
        report.failed_stage = stage
        logger.error(f"{prefix}: {failure}", extra={"context": report.identifier})
        return report


def run_batch(identifiers: Sequence[str], output_dir=".", max_workers: int = MAX_WORKERS) -> List[SessionReport]:
    """
    Runs independent sessions on a bounded thread pool.
    Each worker builds its own session and HTTP session; reports come back in input order.
    """
    if not identifiers:
        return []

    def _run_one(identifier):
        with requests.Session() as http:
            return ProfileCrawlSession(output_dir, http=http).run(identifier)

    workers = max(1, min(max_workers, len(identifiers)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(_run_one, identifiers))


def summarize(reports: Sequence[SessionReport]) -> None:
    ok = sum(1 for r in reports if r.ok)
    images = sum(1 for r in reports if r.image_file is not None)
    logger.info("=" * 50)
    logger.info("CRAWL SESSION SUMMARY")
    logger.info(f"Profiles: {len(reports)} | JSON written: {ok} | Images saved: {images}")
    for r in reports:
        if r.failed_stage is not None:
            logger.info(f"  {r.identifier}: failed at {r.failed_stage.value}")
        elif r.image_failure is not None:
            logger.info(f"  {r.identifier}: saved, image download failed")
    logger.info("=" * 50)
