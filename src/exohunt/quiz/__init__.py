"""Planet trivia game."""

from exohunt.quiz.game import GuessOutcome, QuizGame, QuizState, QuizStateError
from exohunt.quiz.leaderboard import Leaderboard, LeaderboardEntry, SaveOutcome
from exohunt.quiz.questions import (
    DEFAULT_QUESTIONS,
    PlanetFeature,
    TriviaQuestion,
    load_questions,
    planet_features,
)

__all__ = [
    "DEFAULT_QUESTIONS",
    "GuessOutcome",
    "Leaderboard",
    "LeaderboardEntry",
    "PlanetFeature",
    "QuizGame",
    "QuizState",
    "QuizStateError",
    "SaveOutcome",
    "TriviaQuestion",
    "load_questions",
    "planet_features",
]
