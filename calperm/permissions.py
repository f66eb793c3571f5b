"""
Calendar access levels and delegate sharing options.

The ten access levels are a closed set. Each carries a description and a
display colour (palette name), plus what a grantee at that level can do with
calendar items, which drives the sample preview shown while choosing a level.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AccessLevel(str, Enum):
    OWNER = "Owner"
    PUBLISHING_EDITOR = "PublishingEditor"
    EDITOR = "Editor"
    PUBLISHING_AUTHOR = "PublishingAuthor"
    AUTHOR = "Author"
    NON_EDITING_AUTHOR = "NonEditingAuthor"
    REVIEWER = "Reviewer"
    CONTRIBUTOR = "Contributor"
    AVAILABILITY_ONLY = "AvailabilityOnly"
    LIMITED_DETAILS = "LimitedDetails"

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, text: str) -> Optional["AccessLevel"]:
        """Look up a level by name, ignoring case. None if unknown."""
        if not text:
            return None
        key = str(text).replace(" ", "").lower()
        for level in cls:
            if level.value.lower() == key:
                return level
        return None

    @property
    def info(self) -> "AccessLevelInfo":
        return ACCESS_LEVEL_INFO[self]

    @property
    def description(self) -> str:
        return ACCESS_LEVEL_INFO[self].description

    @property
    def color(self) -> str:
        return ACCESS_LEVEL_INFO[self].color


@dataclass(frozen=True)
class AccessLevelInfo:
    description: str
    color: str
    read: str     # "full", "limited", "freebusy" or "none"
    create: bool
    edit: str     # "all", "own" or "none"
    delete: str   # "all", "own" or "none"


ACCESS_LEVEL_INFO = {
    AccessLevel.OWNER: AccessLevelInfo(
        "Full control, including managing permissions", "Red",
        read="full", create=True, edit="all", delete="all"),
    AccessLevel.PUBLISHING_EDITOR: AccessLevelInfo(
        "Create, read, edit and delete all items; create subfolders", "Magenta",
        read="full", create=True, edit="all", delete="all"),
    AccessLevel.EDITOR: AccessLevelInfo(
        "Create, read, edit and delete all items", "Yellow",
        read="full", create=True, edit="all", delete="all"),
    AccessLevel.PUBLISHING_AUTHOR: AccessLevelInfo(
        "Create and read items, create subfolders; edit and delete own items", "DarkYellow",
        read="full", create=True, edit="own", delete="own"),
    AccessLevel.AUTHOR: AccessLevelInfo(
        "Create and read items; edit and delete own items", "Green",
        read="full", create=True, edit="own", delete="own"),
    AccessLevel.NON_EDITING_AUTHOR: AccessLevelInfo(
        "Create and read items; delete own items", "DarkGreen",
        read="full", create=True, edit="none", delete="own"),
    AccessLevel.REVIEWER: AccessLevelInfo(
        "Read all items", "Cyan",
        read="full", create=False, edit="none", delete="none"),
    AccessLevel.CONTRIBUTOR: AccessLevelInfo(
        "Create items only; cannot see the calendar", "Blue",
        read="none", create=True, edit="none", delete="none"),
    AccessLevel.AVAILABILITY_ONLY: AccessLevelInfo(
        "View free/busy time only", "Gray",
        read="freebusy", create=False, edit="none", delete="none"),
    AccessLevel.LIMITED_DETAILS: AccessLevelInfo(
        "View free/busy time, subject and location", "DarkCyan",
        read="limited", create=False, edit="none", delete="none"),
}


def access_level_color(access_rights: str, default: str = "Gray") -> str:
    """Display colour for an access rights string (may be a non-standard value)."""
    level = AccessLevel.parse(access_rights)
    return level.color if level else default


# ============================================================================
# Delegate sharing flags (only meaningful with Editor)
# ============================================================================

class SharingFlag(str, Enum):
    NONE = "None"
    DELEGATE = "Delegate"
    CAN_VIEW_PRIVATE_ITEMS = "CanViewPrivateItems"

    def __str__(self):
        return self.value


class DelegateChoice(Enum):
    STANDARD = ("Standard editor", "No delegate rights", (SharingFlag.NONE,))
    DELEGATE = ("Delegate", "Receives meeting requests and responses", (SharingFlag.DELEGATE,))
    DELEGATE_PRIVATE = (
        "Delegate with private items",
        "Delegate who can also see private appointments",
        (SharingFlag.DELEGATE, SharingFlag.CAN_VIEW_PRIVATE_ITEMS),
    )

    def __init__(self, label: str, description: str, flags: tuple):
        self.label = label
        self.description = description
        self.flags = flags

    @property
    def sharing_flags(self) -> str:
        """Flags in the service's comma-separated form, e.g. "Delegate,CanViewPrivateItems"."""
        return format_sharing_flags(self.flags)


def format_sharing_flags(flags) -> str:
    """Join flags into "A,B" form; an empty set is "None"."""
    names = [str(f) for f in flags or () if str(f) != SharingFlag.NONE.value]
    return ",".join(names) if names else SharingFlag.NONE.value


def parse_sharing_flags(text: str) -> tuple:
    """Parse "Delegate, CanViewPrivateItems" into SharingFlag members."""
    flags = []
    for part in (text or "").split(","):
        part = part.strip()
        for flag in SharingFlag:
            if flag is not SharingFlag.NONE and flag.value.lower() == part.lower():
                flags.append(flag)
    return tuple(flags) or (SharingFlag.NONE,)


# ============================================================================
# Sample content preview
# ============================================================================

SAMPLE_EVENT = {
    "time": "10:00-11:00",
    "subject": "Quarterly planning",
    "location": "Room 4.12",
    "body": "Agenda: budget review, hiring plan",
}

_EDIT_TEXT = {"all": "all items", "own": "own items only", "none": "no"}


def sample_preview(level: AccessLevel) -> list[list[tuple[str, str]]]:
    """
    Lines showing what a grantee at this level sees of a sample meeting.

    Each line is a list of (text, colour) segments.
    """
    info = level.info
    e = SAMPLE_EVENT
    lines = []

    if info.read == "none":
        lines.append([("(calendar items are hidden)", "DarkGray")])
    elif info.read == "freebusy":
        lines.append([(e["time"], "White"), ("  Busy", "DarkYellow")])
    elif info.read == "limited":
        lines.append([
            (e["time"], "White"), ("  Busy  ", "DarkYellow"),
            (e["subject"], "Cyan"), (f"  @ {e['location']}", "Gray"),
        ])
    else:
        lines.append([
            (e["time"], "White"), ("  ", None),
            (e["subject"], "Cyan"), (f"  @ {e['location']}", "Gray"),
        ])
        lines.append([("            " + e["body"], "DarkGray")])

    yes_no = lambda allowed: ("yes", "Green") if allowed else ("no", "DarkRed")
    create_text, create_color = yes_no(info.create)
    edit_text = _EDIT_TEXT[info.edit]
    delete_text = _EDIT_TEXT[info.delete]
    lines.append([
        ("Create: ", "DarkGray"), (create_text, create_color),
        ("  Edit: ", "DarkGray"), (edit_text, "Green" if info.edit != "none" else "DarkRed"),
        ("  Delete: ", "DarkGray"), (delete_text, "Green" if info.delete != "none" else "DarkRed"),
    ])
    return lines
