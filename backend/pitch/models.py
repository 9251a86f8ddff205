from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Container, Dict, List, Optional, Tuple
import random
import string

# Game rules
TOSS_MIN = 1
TOSS_MAX = 10
PASSES_FOR_GOAL = 3
WINNING_SCORE = 3
TOSS_PICKS = ('even', 'odd')
CENTER = 'center'

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


class Visibility(str, Enum):
    PUBLIC = 'public'
    PRIVATE = 'private'

    @classmethod
    def from_flag(cls, is_public) -> 'Visibility':
        return cls.PUBLIC if is_public else cls.PRIVATE


class Phase(str, Enum):
    TOSS_CALL = 'TOSS_CALL'
    TOSS_WAIT_PROCEED = 'TOSS_WAIT_PROCEED'
    TOSS_DECIDE = 'TOSS_DECIDE'
    PASS = 'PASS'
    GOAL = 'GOAL'
    GAME_OVER = 'GAME_OVER'


def generate_room_code(taken: Container[str], length: int = 6, rng=random) -> str:
    """Generate a short room code that is not in ``taken``."""
    while True:
        code = ''.join(rng.choices(ROOM_CODE_ALPHABET, k=length))
        if code not in taken:
            return code


@dataclass
class GameSession:
    """Authoritative state of one match between exactly two participants.

    Participants are opaque connection ids. ``message`` is a display template
    where ``{player}`` stands for ``message_subject``'s display name; the view
    projector fills it in.
    """

    players: Tuple[str, str]
    toss_caller: str
    phase: Phase = Phase.TOSS_CALL
    toss_winner: Optional[str] = None
    ball_holder: Optional[str] = None
    pass_count: int = 0
    pending_moves: Dict[str, Any] = field(default_factory=dict)
    scores: Dict[str, int] = field(default_factory=dict)
    message: str = ''
    message_subject: Optional[str] = None

    def __post_init__(self):
        if len(self.players) != 2 or self.players[0] == self.players[1]:
            raise ValueError('a session needs exactly two distinct players')
        if self.toss_caller not in self.players:
            raise ValueError('toss caller must be one of the players')
        for p in self.players:
            self.scores.setdefault(p, 0)

    @classmethod
    def start(cls, host: str, guest: str) -> 'GameSession':
        return cls(players=(host, guest), toss_caller=host)

    def has_player(self, participant: str) -> bool:
        return participant in self.players

    def other(self, participant: str) -> str:
        first, second = self.players
        return second if participant == first else first

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def set_message(self, text: str, subject: Optional[str] = None) -> None:
        self.message = text
        self.message_subject = subject


@dataclass
class Room:
    code: str
    visibility: Visibility
    participants: List[str] = field(default_factory=list)
    session: Optional[GameSession] = None

    @property
    def host(self) -> Optional[str]:
        return self.participants[0] if self.participants else None

    @property
    def is_full(self) -> bool:
        return len(self.participants) >= 2

    @property
    def is_public(self) -> bool:
        return self.visibility is Visibility.PUBLIC

    @property
    def is_open(self) -> bool:
        """Listed for discovery: public and waiting for a second player."""
        return self.is_public and len(self.participants) == 1
