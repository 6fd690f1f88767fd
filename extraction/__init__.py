from extraction.models import ProfileRecord, ValidationFailure, ExtractionError
from extraction.rules import SelectionRule, RuleTarget, PROFILE_RULES
from extraction.extractor import ProfileExtractor
from extraction.validator import validate
