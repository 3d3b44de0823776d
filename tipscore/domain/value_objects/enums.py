from enum import Enum


class MatchStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    LIVE = "LIVE"
    FINISHED = "FINISHED"
    POSTPONED = "POSTPONED"
    CANCELLED = "CANCELLED"


class PredictionStatus(str, Enum):
    PENDING = "PENDING"
    SCORED = "SCORED"
    VOID = "VOID"


class Tendency(str, Enum):
    HOME = "HOME"
    DRAW = "DRAW"
    AWAY = "AWAY"


class Side(str, Enum):
    HOME = "HOME"
    AWAY = "AWAY"


class StreakType(str, Enum):
    NONE = "NONE"
    EXACT = "EXACT"
    TENDENCY = "TENDENCY"


class StreakOutcome(str, Enum):
    EXACT = "EXACT"
    TENDENCY = "TENDENCY"
    WRONG = "WRONG"


class SkipReason(str, Enum):
    MATCH_NOT_FOUND = "MATCH_NOT_FOUND"
    MATCH_NOT_FINISHED = "MATCH_NOT_FINISHED"
    NO_PREDICTIONS = "NO_PREDICTIONS"
    ALREADY_SCORED = "ALREADY_SCORED"
