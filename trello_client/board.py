"""
Board resource and its navigation to child resources.

A ``Board`` is the root of the resource tree. Each accessor issues exactly one
request through the board's client and returns freshly decoded resources that
share that client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ._decode import Transport, decode_many, decode_one, expect, expect_id, expect_list, expect_object
from .models import Action, Card, Checklist, List, Member
from .options import AddCardOpts

logger = logging.getLogger(__name__)


@dataclass
class BoardBackground:
    """One resized variant of a board's background image."""

    width: int = 0
    height: int = 0
    url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BoardBackground:
        return cls(
            width=expect(data, "width", int, 0),
            height=expect(data, "height", int, 0),
            url=expect(data, "url", str, ""),
        )


@dataclass
class BoardPrefs:
    """Board preferences: permissions, voting/comment policy and appearance."""

    permission_level: str = ""
    voting: str = ""
    comments: str = ""
    invitations: str = ""
    self_join: bool = False
    card_covers: bool = False
    card_aging: str = ""
    calendar_feed_enabled: bool = False
    background: str = ""
    background_color: str | None = None
    background_image: str | None = None
    background_image_scaled: list[BoardBackground] = field(default_factory=list)
    background_tile: bool = False
    background_brightness: str = ""
    can_be_public: bool = False
    can_be_org: bool = False
    can_be_private: bool = False
    can_invite: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BoardPrefs:
        return cls(
            permission_level=expect(data, "permissionLevel", str, ""),
            voting=expect(data, "voting", str, ""),
            comments=expect(data, "comments", str, ""),
            invitations=expect(data, "invitations", str, ""),
            self_join=expect(data, "selfJoin", bool, False),
            card_covers=expect(data, "cardCovers", bool, False),
            card_aging=expect(data, "cardAging", str, ""),
            calendar_feed_enabled=expect(data, "calendarFeedEnabled", bool, False),
            background=expect(data, "background", str, ""),
            background_color=expect(data, "backgroundColor", str),
            background_image=expect(data, "backgroundImage", str),
            background_image_scaled=[
                BoardBackground.from_dict(scaled) for scaled in expect_list(data, "backgroundImageScaled", dict)
            ],
            background_tile=expect(data, "backgroundTile", bool, False),
            background_brightness=expect(data, "backgroundBrightness", str, ""),
            can_be_public=expect(data, "canBePublic", bool, False),
            can_be_org=expect(data, "canBeOrg", bool, False),
            can_be_private=expect(data, "canBePrivate", bool, False),
            can_invite=expect(data, "canInvite", bool, False),
        )


@dataclass
class LabelNames:
    """Display names for the six fixed label colours."""

    red: str = ""
    orange: str = ""
    yellow: str = ""
    green: str = ""
    blue: str = ""
    purple: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LabelNames:
        return cls(**{color: expect(data, color, str, "") for color in cls.__dataclass_fields__})

    def as_dict(self) -> dict[str, str]:
        """Colour -> display name, in the API's colour order."""
        return {color: getattr(self, color) for color in self.__dataclass_fields__}


@dataclass
class Board:
    """
    A board and the entry point to its lists, cards, members, checklists and actions.

    Example:
        >>> board = client.board("4d5ea62fd76aa1136000000c")
        >>> for lst in board.lists():
        ...     print(lst.name, len(lst.cards()))
    """

    id: str
    name: str = ""
    desc: str = ""
    closed: bool = False
    id_organization: str | None = None
    pinned: bool = False
    url: str = ""
    short_url: str = ""
    prefs: BoardPrefs = field(default_factory=BoardPrefs)
    label_names: LabelNames = field(default_factory=LabelNames)
    client: Transport | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], client: Transport | None = None) -> Board:
        return cls(
            id=expect_id(data),
            name=expect(data, "name", str, ""),
            desc=expect(data, "desc", str, ""),
            closed=expect(data, "closed", bool, False),
            id_organization=expect(data, "idOrganization", str),
            pinned=expect(data, "pinned", bool, False),
            url=expect(data, "url", str, ""),
            short_url=expect(data, "shortUrl", str, ""),
            prefs=BoardPrefs.from_dict(expect_object(data, "prefs")),
            label_names=LabelNames.from_dict(expect_object(data, "labelNames")),
            client=client,
        )

    def _get(self, *segments: str) -> bytes:
        return self.client.get("/".join([f"/boards/{self.id}", *segments]))

    # =========================================================================
    # Children
    # =========================================================================

    def lists(self) -> list[List]:
        """Lists on this board."""
        return decode_many(List, self._get("lists"), self.client)

    def members(self) -> list[Member]:
        """Members of this board."""
        return decode_many(Member, self._get("members"), self.client)

    def cards(self) -> list[Card]:
        """All cards on this board."""
        return decode_many(Card, self._get("cards"), self.client)

    def card(self, card_id: str) -> Card:
        """
        Get a single card on this board.

        Args:
            card_id: The id of the card

        Raises:
            TrelloAPIError: If the card does not exist or the request fails
        """
        return decode_one(Card, self._get("cards", card_id), self.client)

    def checklists(self) -> list[Checklist]:
        """All checklists on cards of this board."""
        return decode_many(Checklist, self._get("checklists"), self.client)

    def member_cards(self, member_id: str) -> list[Card]:
        """Cards on this board assigned to the given member."""
        return decode_many(Card, self._get("members", member_id, "cards"), self.client)

    def actions(self) -> list[Action]:
        """Recent activity on this board, newest first."""
        return decode_many(Action, self._get("actions"), self.client)

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_card(self, opts: AddCardOpts) -> Card:
        """
        Create a new card.

        The options are validated before anything is sent; invalid options
        never reach the API. Calling this twice creates two cards.

        Args:
            opts: Card creation options (``list_id`` decides where the card goes)

        Returns:
            The created card

        Raises:
            InvalidOptionsError: If the options fail validation
            TrelloAPIError: If the request fails

        Example:
            >>> card = board.add_card(AddCardOpts(name="Ship it", list_id=lst.id, position="top"))
        """
        opts.validate()
        form = opts.to_form()
        logger.debug(f"Creating card {opts.name!r} in list {opts.list_id}")
        return decode_one(Card, self.client.post("/cards", form), self.client)
