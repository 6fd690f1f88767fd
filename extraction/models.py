from dataclasses import dataclass, field, FrozenInstanceError
from types import MappingProxyType
from typing import Mapping, Tuple

MANDATORY_FIELDS = ("title", "profile_name")

class ExtractionError(TypeError):
    """Raised when the extractor is handed something that is not a parsed document."""

@dataclass
class ProfileRecord:
    """
    Data extracted from one profile page.

    Built empty, filled in place by the extraction rules, then finalized
    (read-only) once validation passes. links and icon_links are always
    mappings, never None.
    """
    links: Mapping[str, str] = field(default_factory=dict)
    icon_links: Mapping[str, str] = field(default_factory=dict)
    title: str = ""
    profile_name: str = ""
    profile_image_url: str = ""
    finalized: bool = field(default=False, compare=False, repr=False)

    def __setattr__(self, name, value):
        if getattr(self, "finalized", False):
            raise FrozenInstanceError(f"cannot assign to field '{name}' of a finalized record")
        super().__setattr__(name, value)

    def missing_fields(self) -> Tuple[str, ...]:
        return tuple(name for name in MANDATORY_FIELDS if not getattr(self, name))

    def finalize(self) -> "ProfileRecord":
        """Freeze the record in place; mappings become read-only views."""
        if not self.finalized:
            super().__setattr__("links", MappingProxyType(dict(self.links)))
            super().__setattr__("icon_links", MappingProxyType(dict(self.icon_links)))
            super().__setattr__("finalized", True)
        return self

@dataclass(frozen=True)
class ValidationFailure:
    """
    The page did not match the expected layout: a mandatory field is empty.
    Fatal: nothing is written.
    """
    missing: Tuple[str, ...]

    def __str__(self):
        return f"failed to extract required profile information (missing: {', '.join(self.missing)})"
