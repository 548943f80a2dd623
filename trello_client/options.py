"""Options for write operations and their pre-flight validation."""

from dataclasses import dataclass, field
from datetime import datetime

from .exceptions import InvalidOptionsError

MAX_TEXT_LENGTH = 16384
ID_LENGTH = 24
POSITIONS = ("top", "bottom")

# Literal the API treats as an explicit empty value.
NULL = "null"


def format_due(due: datetime) -> str:
    """Format a due date as ``YYYY-MM-DDTHH:MM:SS+HH:MM``.

    Naive datetimes are taken to be in local time.
    """
    if due.tzinfo is None:
        due = due.astimezone()
    return due.replace(microsecond=0).isoformat()


@dataclass
class AddCardOpts:
    """
    Options for creating a card.

    Attributes:
        name: Card title, 1 to 16384 characters
        list_id: 24-character id of the list the card goes into
        description: Card description, up to 16384 characters
        position: "top", "bottom", or "" to let the API decide
        due: Due date, or None for no due date
        labels: Label ids to attach
        members: Member ids to assign
    """

    name: str
    list_id: str
    description: str = ""
    position: str = ""
    due: datetime | None = None
    labels: list[str] = field(default_factory=list)
    members: list[str] = field(default_factory=list)

    def validate(self) -> None:
        """
        Check the options, stopping at the first problem.

        Raises:
            InvalidOptionsError: If any field is out of range
        """
        if not 1 <= len(self.name) <= MAX_TEXT_LENGTH:
            raise InvalidOptionsError(f"Name must be a string of length from 1 to {MAX_TEXT_LENGTH}")

        if len(self.description) > MAX_TEXT_LENGTH:
            raise InvalidOptionsError(f"Description may not be longer than {MAX_TEXT_LENGTH} characters")

        if self.position and self.position not in POSITIONS:
            raise InvalidOptionsError("If position is present it has to be 'bottom' or 'top'")

        if len(self.list_id) != ID_LENGTH:
            raise InvalidOptionsError(f"list_id is required and must be a valid {ID_LENGTH}-char hex string")

    def to_form(self) -> dict[str, str]:
        """Build the form parameters for ``POST /cards``."""
        form = {
            "name": self.name,
            "idList": self.list_id,
            # Source-URL cards are not supported; always sent as null.
            "urlSource": NULL,
        }
        if self.description:
            form["desc"] = self.description
        if self.position:
            form["pos"] = self.position
        if self.labels:
            form["idLabels"] = ",".join(self.labels)
        if self.members:
            form["idMembers"] = ",".join(self.members)
        form["due"] = NULL if self.due is None else format_due(self.due)
        return form
