"""
JSON persistence of extracted profile records.
Fixed schema; keys are emitted in a fixed order.
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

from crawler.core import logger
from extraction.models import ProfileRecord

# (wire key, record attribute), in output order
SCHEMA = (
    ("links", "links"),
    ("icon_links", "icon_links"),
    ("title", "title"),
    ("profile_name", "profile_name"),
    ("profile_img", "profile_image_url"),
)

RESULT_SUFFIX = ".json"

class WriteFailureKind(Enum):
    SERIALIZATION = "SERIALIZATION"
    IO = "IO"

@dataclass(frozen=True)
class WriteFailure:
    path: str
    kind: WriteFailureKind
    message: str

    def __str__(self):
        if self.kind is WriteFailureKind.SERIALIZATION:
            return f"error marshalling result to JSON: {self.message}"
        return f"error writing result to file {self.path}: {self.message}"

class SerializationError(ValueError):
    pass

def serialize(record: ProfileRecord) -> bytes:
    """UTF-8 JSON, two-space indent. Raises SerializationError on unencodable values."""
    payload = {}
    for key, attr in SCHEMA:
        value = getattr(record, attr)
        payload[key] = dict(value) if key in ("links", "icon_links") else value
    try:
        return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(str(e)) from e

def deserialize(data: bytes) -> ProfileRecord:
    raw = json.loads(data.decode("utf-8"))
    values = {attr: raw.get(key) for key, attr in SCHEMA}
    # Mappings may be null in foreign documents
    values["links"] = dict(values["links"] or {})
    values["icon_links"] = dict(values["icon_links"] or {})
    for attr in ("title", "profile_name", "profile_image_url"):
        values[attr] = values[attr] or ""
    return ProfileRecord(**values)

def result_path(record: ProfileRecord, directory=".") -> Path:
    return Path(directory) / f"{record.profile_name}{RESULT_SUFFIX}"

def write(data: bytes, path) -> Union[Path, WriteFailure]:
    """Writes data to path, overwriting any existing file."""
    path = Path(path)
    try:
        path.write_bytes(data)
    except OSError as e:
        return WriteFailure(str(path), WriteFailureKind.IO, str(e))
    logger.info(f"Data successfully saved to {path}", extra={"context": "serializer"})
    return path

def save_record(record: ProfileRecord, directory=".") -> Union[Path, WriteFailure]:
    """Serialize and write in one step; both failure modes come back as WriteFailure."""
    path = result_path(record, directory)
    try:
        data = serialize(record)
    except SerializationError as e:
        return WriteFailure(str(path), WriteFailureKind.SERIALIZATION, str(e))
    return write(data, path)
