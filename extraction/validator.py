from typing import Union

from extraction.models import ProfileRecord, ValidationFailure

def validate(record: ProfileRecord) -> Union[ProfileRecord, ValidationFailure]:
    """
    Checks the mandatory fields (title, profile_name).
    Links, icon links and the profile image are optional facets.
    Returns the finalized record on success.
    """
    missing = record.missing_fields()
    if missing:
        return ValidationFailure(missing=missing)
    return record.finalize()
