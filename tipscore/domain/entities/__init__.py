from .match import Match
from .prediction import Prediction
from .predictor_model import PredictorModel

__all__ = [
    "Match",
    "Prediction",
    "PredictorModel",
]
