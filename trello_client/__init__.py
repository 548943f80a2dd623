"""
Trello Client - typed Python client library for the Trello REST API.
"""

from .board import Board, BoardBackground, BoardPrefs, LabelNames
from .client import TrelloClient
from .exceptions import InvalidOptionsError, TrelloAPIError, TrelloDecodeError
from .logging_config import configure_logging
from .models import Action, Card, CheckItem, Checklist, Label, List, Member
from .options import AddCardOpts

__all__ = [
    "TrelloClient",
    "TrelloAPIError",
    "TrelloDecodeError",
    "InvalidOptionsError",
    "Board",
    "BoardBackground",
    "BoardPrefs",
    "LabelNames",
    "List",
    "Card",
    "Label",
    "Member",
    "Checklist",
    "CheckItem",
    "Action",
    "AddCardOpts",
    "configure_logging",
]
__version__ = "1.0.0"
