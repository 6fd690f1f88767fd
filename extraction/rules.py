"""
Declarative selection rules for the profile page layout.

Every selector string that depends on the remote page markup lives in
PROFILE_RULES. Adapting to a markup change should only touch this table.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from bs4 import Tag

class RuleTarget(Enum):
    """Record field a rule writes to."""
    TITLE = "title"
    LINKS = "links"
    ICON_LINKS = "icon_links"
    PROFILE_NAME = "profile_name"
    PROFILE_IMAGE_URL = "profile_image_url"

# Reads a value from one matched node
NodeReader = Callable[[Tag], str]

@dataclass(frozen=True)
class SelectionRule:
    """
    A CSS selector plus extraction logic mapping matched nodes to a record field.
    Mapping rules (key_reader set) insert key -> value; scalar rules set the value.
    Empty values and empty keys are skipped unless skip_empty is off, in which case
    every match overwrites the field, empty text included.
    """
    name: str
    selector: str
    target: RuleTarget
    value_reader: NodeReader
    key_reader: Optional[NodeReader] = None
    skip_empty: bool = True

    @property
    def is_mapping(self) -> bool:
        return self.key_reader is not None

# --- Node readers ---

def text_of(node: Tag) -> str:
    """Full text content, whitespace kept as in the source."""
    return node.get_text()

def attr_of(name: str) -> NodeReader:
    def read(node: Tag) -> str:
        value = node.get(name, "")
        # Multi-valued attributes (class, rel) come back as lists
        if isinstance(value, list):
            value = " ".join(value)
        return value.strip()
    return read

def child_text(selector: str) -> NodeReader:
    """Concatenated text of all descendants matching selector, trimmed."""
    def read(node: Tag) -> str:
        return "".join(child.get_text() for child in node.select(selector)).strip()
    return read

def child_attr(selector: str, name: str) -> NodeReader:
    """Attribute of the first descendant matching selector that carries it."""
    def read(node: Tag) -> str:
        for child in node.select(selector):
            value = attr_of(name)(child)
            if value:
                return value
        return ""
    return read

def first_of(*readers: NodeReader) -> NodeReader:
    def read(node: Tag) -> str:
        for reader in readers:
            value = reader(node)
            if value:
                return value
        return ""
    return read

# --- Rule table ---

LINK_BUTTON_SELECTOR = "a[data-testid='LinkButton']"
SOCIAL_ICON_SELECTOR = "a[data-testid='SocialIcon']"

PROFILE_RULES: Tuple[SelectionRule, ...] = (
    SelectionRule(
        name="title",
        selector="head > title",
        target=RuleTarget.TITLE,
        value_reader=text_of,
        skip_empty=False,
    ),
    SelectionRule(
        name="link_buttons",
        selector=LINK_BUTTON_SELECTOR,
        target=RuleTarget.LINKS,
        key_reader=child_text("div > p"),
        value_reader=attr_of("href"),
    ),
    SelectionRule(
        name="social_icons",
        selector=SOCIAL_ICON_SELECTOR,
        target=RuleTarget.ICON_LINKS,
        # Icon name sits on the nested svg <title>; older markup puts it on the anchor
        key_reader=first_of(
            child_attr("title", "title"),
            attr_of("title"),
            child_text("title"),
        ),
        value_reader=attr_of("href"),
    ),
    SelectionRule(
        name="profile_name",
        selector="div[id='profile-title']",
        target=RuleTarget.PROFILE_NAME,
        value_reader=text_of,
        skip_empty=False,
    ),
    SelectionRule(
        name="profile_image",
        selector="img[data-testid='ProfileImage']",
        target=RuleTarget.PROFILE_IMAGE_URL,
        value_reader=attr_of("src"),
    ),
)
