from typing import Iterable, Optional

from bs4 import BeautifulSoup

from crawler.core import logger
from extraction.models import ExtractionError, ProfileRecord
from extraction.rules import PROFILE_RULES, SelectionRule

class ProfileExtractor:
    """
    Applies the selection rules to a parsed profile page.
    Invariants:
    - Isolated: no I/O, the document is only read.
    - Order-insensitive: each rule writes its own field; within a rule the
      last match in document order wins.
    - Missing nodes leave the field at its zero value.
    """

    def __init__(self, rules: Optional[Iterable[SelectionRule]] = None):
        self._rules = tuple(rules) if rules is not None else PROFILE_RULES

    @property
    def rules(self):
        return self._rules

    def extract(self, document: BeautifulSoup, record: Optional[ProfileRecord] = None) -> ProfileRecord:
        if not isinstance(document, BeautifulSoup):
            raise ExtractionError(f"expected a parsed BeautifulSoup document, got {type(document).__name__}")

        record = record if record is not None else ProfileRecord()
        for rule in self._rules:
            self.apply(rule, document, record)
        return record

    @staticmethod
    def apply(rule: SelectionRule, document: BeautifulSoup, record: ProfileRecord) -> int:
        """Apply one rule; returns the number of matches that were written."""
        field_name = rule.target.value
        written = 0

        for node in document.select(rule.selector):
            value = rule.value_reader(node)
            if not value and rule.skip_empty:
                continue
            if rule.is_mapping:
                key = rule.key_reader(node)
                if not key:
                    continue
                getattr(record, field_name)[key] = value
            else:
                setattr(record, field_name, value)
            written += 1

        logger.debug(f"[EXTRACT] rule {rule.name}: {written} match(es) written", extra={"context": "extractor"})
        return written
