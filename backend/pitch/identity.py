from typing import Dict, Optional


class IdentityTable:
    """Maps connection ids to the display name each connection picked."""

    def __init__(self, default_name: str = 'Player'):
        self.default_name = default_name
        self._names: Dict[str, str] = {}

    def set_name(self, participant: str, name) -> str:
        if isinstance(name, str):
            name = name.strip()
        else:
            name = None
        self._names[participant] = name or self.default_name
        return self._names[participant]

    def name_of(self, participant: Optional[str]) -> Optional[str]:
        if participant is None:
            return None
        return self._names.get(participant, self.default_name)

    def forget(self, participant: str) -> None:
        self._names.pop(participant, None)

    def __contains__(self, participant: str) -> bool:
        return participant in self._names
