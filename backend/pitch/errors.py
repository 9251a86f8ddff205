class PitchError(Exception):
    """Base class for errors surfaced to clients."""


class RoomUnavailable(PitchError):
    """Join target is unknown, already full, or hosted by the joiner."""

    message = 'Room unavailable'

    def __init__(self, code=None):
        super().__init__(self.message)
        self.code = code
