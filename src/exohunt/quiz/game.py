"""
Trivia game state machine.

A round cycles question -> result -> next question. The score carries over
between rounds until the game object is discarded.
"""

import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from exohunt.quiz.questions import DEFAULT_QUESTIONS, TriviaQuestion
from exohunt.utils.logging import get_logger

log = get_logger(__name__)


class QuizState(Enum):
    """Where the game currently is."""

    QUESTION = "question"
    RESULT = "result"


class QuizStateError(ValueError):
    """Raised when an action is not allowed in the current state."""


@dataclass(frozen=True)
class GuessOutcome:
    """Result of answering one question."""

    guess: str
    correct_choice: str
    points: int
    score: int

    @property
    def is_correct(self) -> bool:
        """Whether the guess was right."""
        return self.guess == self.correct_choice


class QuizGame:
    """
    Planet trivia game.

    Questions are drawn at random with replacement; the two choices of each
    question are shown in random order.
    """

    def __init__(
        self,
        questions: Sequence[TriviaQuestion] = DEFAULT_QUESTIONS,
        *,
        correct_points: int = 100,
        wrong_points: int = -50,
        rng: random.Random | None = None,
    ) -> None:
        """
        Start a game on a random question.

        Args:
            questions: Question bank; must not be empty.
            correct_points: Points added for a right answer.
            wrong_points: Points added for a wrong answer (usually negative).
            rng: Random source (seeded in tests).

        Raises:
            ValueError: If the question bank is empty.
        """
        if not questions:
            msg = "Question bank is empty"
            raise ValueError(msg)

        self.questions = list(questions)
        self.correct_points = correct_points
        self.wrong_points = wrong_points
        self._rng = rng or random.Random()

        self.score = 0
        self.last_outcome: GuessOutcome | None = None
        self.state = QuizState.QUESTION
        self.current: TriviaQuestion = self.questions[0]
        self.choices: list[str] = []
        self._draw()

    def _draw(self) -> None:
        self.current = self._rng.choice(self.questions)
        choices = [self.current.wrong_choice, self.current.correct_choice]
        self._rng.shuffle(choices)
        self.choices = choices
        self.last_outcome = None
        self.state = QuizState.QUESTION

    def guess(self, choice: str) -> GuessOutcome:
        """
        Answer the current question.

        Args:
            choice: One of ``choices``.

        Returns:
            The outcome, including the updated score.

        Raises:
            QuizStateError: If the current question was already answered.
            ValueError: If ``choice`` is not one of the offered choices.
        """
        if self.state is not QuizState.QUESTION:
            msg = "Question already answered; call next_question() first"
            raise QuizStateError(msg)
        if choice not in self.choices:
            msg = f"Not one of the offered choices: {choice!r}"
            raise ValueError(msg)

        correct = choice == self.current.correct_choice
        points = self.correct_points if correct else self.wrong_points
        self.score += points

        self.last_outcome = GuessOutcome(
            guess=choice,
            correct_choice=self.current.correct_choice,
            points=points,
            score=self.score,
        )
        self.state = QuizState.RESULT
        log.debug(
            "Answered question",
            planet=self.current.planet_name,
            correct=correct,
            score=self.score,
        )
        return self.last_outcome

    def next_question(self) -> TriviaQuestion:
        """
        Move on to a new random question.

        Raises:
            QuizStateError: If the current question is still unanswered.
        """
        if self.state is not QuizState.RESULT:
            msg = "Answer the current question before moving on"
            raise QuizStateError(msg)
        self._draw()
        return self.current
