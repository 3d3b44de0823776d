from typing import NewType

MatchId = NewType("MatchId", int)
PredictionId = NewType("PredictionId", int)
ModelId = NewType("ModelId", str)
