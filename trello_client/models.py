"""
Resource types reachable from a board: lists, cards, members, checklists and actions.

Every resource keeps a reference to the client that fetched it, so it can fetch
its own children without the caller passing credentials around again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ._decode import (
    NUMBER,
    Transport,
    decode_many,
    decode_one,
    expect,
    expect_id,
    expect_list,
    expect_object,
    parse_datetime,
)

if TYPE_CHECKING:
    from .board import Board


@dataclass
class Label:
    """A label attached to a card."""

    id: str
    id_board: str = ""
    name: str = ""
    color: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Label:
        return cls(
            id=expect_id(data),
            id_board=expect(data, "idBoard", str, ""),
            name=expect(data, "name", str, ""),
            color=expect(data, "color", str),
        )


@dataclass
class List:
    """A list (column) on a board."""

    id: str
    name: str = ""
    closed: bool = False
    id_board: str = ""
    pos: float = 0
    subscribed: bool = False
    client: Transport | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], client: Transport | None = None) -> List:
        return cls(
            id=expect_id(data),
            name=expect(data, "name", str, ""),
            closed=expect(data, "closed", bool, False),
            id_board=expect(data, "idBoard", str, ""),
            pos=expect(data, "pos", NUMBER, 0),
            subscribed=expect(data, "subscribed", bool, False),
            client=client,
        )

    def cards(self) -> list[Card]:
        """Cards in this list, in list order."""
        return decode_many(Card, self.client.get(f"/lists/{self.id}/cards"), self.client)


@dataclass
class Member:
    """A board member."""

    id: str
    username: str = ""
    full_name: str = ""
    initials: str = ""
    avatar_hash: str | None = None
    bio: str = ""
    url: str = ""
    member_type: str = ""
    client: Transport | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], client: Transport | None = None) -> Member:
        return cls(
            id=expect_id(data),
            username=expect(data, "username", str, ""),
            full_name=expect(data, "fullName", str, ""),
            initials=expect(data, "initials", str, ""),
            avatar_hash=expect(data, "avatarHash", str),
            bio=expect(data, "bio", str, ""),
            url=expect(data, "url", str, ""),
            member_type=expect(data, "memberType", str, ""),
            client=client,
        )

    def boards(self) -> list[Board]:
        """Boards this member belongs to."""
        from .board import Board

        return decode_many(Board, self.client.get(f"/members/{self.id}/boards"), self.client)


@dataclass
class Card:
    """A card on a board."""

    id: str
    name: str = ""
    desc: str = ""
    closed: bool = False
    id_board: str = ""
    id_list: str = ""
    id_short: int = 0
    id_members: list[str] = field(default_factory=list)
    id_labels: list[str] = field(default_factory=list)
    id_checklists: list[str] = field(default_factory=list)
    labels: list[Label] = field(default_factory=list)
    pos: float = 0
    due: datetime | None = None
    date_last_activity: datetime | None = None
    url: str = ""
    short_url: str = ""
    subscribed: bool = False
    client: Transport | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], client: Transport | None = None) -> Card:
        return cls(
            id=expect_id(data),
            name=expect(data, "name", str, ""),
            desc=expect(data, "desc", str, ""),
            closed=expect(data, "closed", bool, False),
            id_board=expect(data, "idBoard", str, ""),
            id_list=expect(data, "idList", str, ""),
            id_short=expect(data, "idShort", int, 0),
            id_members=expect_list(data, "idMembers"),
            id_labels=expect_list(data, "idLabels"),
            id_checklists=expect_list(data, "idChecklists"),
            labels=[Label.from_dict(label) for label in expect_list(data, "labels", dict)],
            pos=expect(data, "pos", NUMBER, 0),
            due=parse_datetime(data.get("due")),
            date_last_activity=parse_datetime(data.get("dateLastActivity")),
            url=expect(data, "url", str, ""),
            short_url=expect(data, "shortUrl", str, ""),
            subscribed=expect(data, "subscribed", bool, False),
            client=client,
        )

    def board(self) -> Board:
        """The board this card lives on."""
        from .board import Board

        return decode_one(Board, self.client.get(f"/boards/{self.id_board}"), self.client)

    def checklists(self) -> list[Checklist]:
        return decode_many(Checklist, self.client.get(f"/cards/{self.id}/checklists"), self.client)

    def members(self) -> list[Member]:
        return decode_many(Member, self.client.get(f"/cards/{self.id}/members"), self.client)

    def actions(self) -> list[Action]:
        return decode_many(Action, self.client.get(f"/cards/{self.id}/actions"), self.client)


@dataclass
class CheckItem:
    """A single item of a checklist."""

    id: str
    name: str = ""
    state: str = "incomplete"
    pos: float = 0
    id_checklist: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CheckItem:
        return cls(
            id=expect_id(data),
            name=expect(data, "name", str, ""),
            state=expect(data, "state", str, "incomplete"),
            pos=expect(data, "pos", NUMBER, 0),
            id_checklist=expect(data, "idChecklist", str, ""),
        )

    @property
    def complete(self) -> bool:
        return self.state == "complete"


@dataclass
class Checklist:
    """A checklist attached to a card."""

    id: str
    name: str = ""
    id_board: str = ""
    id_card: str = ""
    pos: float = 0
    check_items: list[CheckItem] = field(default_factory=list)
    client: Transport | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], client: Transport | None = None) -> Checklist:
        return cls(
            id=expect_id(data),
            name=expect(data, "name", str, ""),
            id_board=expect(data, "idBoard", str, ""),
            id_card=expect(data, "idCard", str, ""),
            pos=expect(data, "pos", NUMBER, 0),
            check_items=[CheckItem.from_dict(item) for item in expect_list(data, "checkItems", dict)],
            client=client,
        )


@dataclass
class Action:
    """
    An entry in a board's or card's activity history.

    ``data`` is left as the raw dict since its shape depends on ``type``
    (e.g. ``createCard``, ``commentCard``, ``updateCard``).
    """

    id: str
    type: str = ""
    id_member_creator: str = ""
    date: datetime | None = None
    data: dict[str, Any] = field(default_factory=dict)
    member_creator: Member | None = None
    client: Transport | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], client: Transport | None = None) -> Action:
        creator = expect(data, "memberCreator", dict)
        return cls(
            id=expect_id(data),
            type=expect(data, "type", str, ""),
            id_member_creator=expect(data, "idMemberCreator", str, ""),
            date=parse_datetime(data.get("date")),
            data=dict(expect_object(data, "data")),
            member_creator=Member.from_dict(creator, client) if creator else None,
            client=client,
        )
