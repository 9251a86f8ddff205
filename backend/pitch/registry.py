import random
from typing import Dict, List, Optional

from pitch.errors import RoomUnavailable
from pitch.models import GameSession, Room, Visibility, generate_room_code


def normalize_code(code) -> Optional[str]:
    if not isinstance(code, str):
        return None
    code = code.strip().upper()
    return code or None


class RoomRegistry:
    """Live rooms keyed by code, in creation order.

    A participant is in at most one room at a time: creating or joining a
    room first releases whatever room the participant was in.
    """

    def __init__(self, code_length: int = 6, rng=None):
        self.code_length = code_length
        self.rng = rng or random.Random()
        self._rooms: Dict[str, Room] = {}

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self):
        return iter(list(self._rooms.values()))

    def get(self, code) -> Optional[Room]:
        code = normalize_code(code)
        return self._rooms.get(code) if code else None

    def create_room(self, host: str, visibility: Visibility) -> Room:
        self.release_participant(host)
        code = generate_room_code(self._rooms, length=self.code_length, rng=self.rng)
        room = Room(code=code, visibility=visibility, participants=[host])
        self._rooms[code] = room
        return room

    def joinable(self, code, participant: str) -> Optional[Room]:
        room = self.get(code)
        if room is None or room.is_full or participant in room.participants:
            return None
        return room

    def join_room(self, code, participant: str) -> GameSession:
        room = self.joinable(code, participant)
        if room is None:
            raise RoomUnavailable(code)
        self.release_participant(participant)
        room.participants.append(participant)
        room.session = GameSession.start(room.participants[0], room.participants[1])
        return room.session

    def list_public_open_rooms(self) -> List[Room]:
        return [r for r in self._rooms.values() if r.is_open]

    def find_room_by_participant(self, participant: str) -> Optional[Room]:
        for room in self._rooms.values():
            if participant in room.participants:
                return room
        return None

    def release_participant(self, participant: str) -> Optional[Room]:
        """Tear down the room ``participant`` is in and return it, if any."""
        room = self.find_room_by_participant(participant)
        if room is not None:
            self._rooms.pop(room.code, None)
        return room
