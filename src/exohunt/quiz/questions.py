"""
Trivia question bank.

Questions come with a few facts about the planet, shown as bars scaled to
a fixed maximum, plus one wrong and one correct answer.
"""

import math
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from exohunt.utils.logging import get_logger

log = get_logger(__name__)

# CSV header -> TriviaQuestion attribute
QUESTION_COLUMNS: dict[str, str] = {
    "planet_name": "planet_name",
    "disposition": "disposition",
    "orbital_period_days": "orbital_period_days",
    "ra_deg": "ra_deg",
    "dec_deg": "dec_deg",
    "Question": "question",
    "Choice1": "wrong_choice",
    "Choice2(correct)": "correct_choice",
}

REQUIRED_QUESTION_COLUMNS = ("planet_name", "Question", "Choice1", "Choice2(correct)")


@dataclass(frozen=True)
class TriviaQuestion:
    """One trivia question about a planet."""

    planet_name: str
    question: str
    wrong_choice: str
    correct_choice: str
    disposition: str = ""
    orbital_period_days: str = ""
    ra_deg: str = ""
    dec_deg: str = ""


@dataclass(frozen=True)
class PlanetFeature:
    """A planet fact displayed as a bar."""

    label: str
    value: str
    max_value: float

    @property
    def display_value(self) -> str:
        """Value with two decimals, or N/A when not numeric."""
        number = _to_float(self.value)
        return "N/A" if number is None else f"{number:.2f}"

    @property
    def percent(self) -> float:
        """Value as a percentage of max_value, clamped to 0-100."""
        number = _to_float(self.value)
        if number is None:
            return 0.0
        return min(100.0, max(0.0, number / self.max_value * 100))


def _to_float(value: str) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def planet_features(question: TriviaQuestion) -> list[PlanetFeature]:
    """Facts shown alongside a question."""
    return [
        PlanetFeature(
            "Orbital Period (days)", question.orbital_period_days or "0", 150
        ),
        PlanetFeature("Right Ascension (deg)", question.ra_deg or "0", 360),
        PlanetFeature("Declination (deg)", question.dec_deg or "0", 180),
    ]


DEFAULT_QUESTIONS: tuple[TriviaQuestion, ...] = (
    TriviaQuestion(
        planet_name="Kepler-186 f",
        disposition="CONFIRMED",
        orbital_period_days="129.9",
        ra_deg="299.1",
        dec_deg="44.4",
        question="What is a key feature of Kepler-186 f?",
        wrong_choice="It has rings like Saturn",
        correct_choice="It is an Earth-sized planet in the habitable zone",
    ),
    TriviaQuestion(
        planet_name="TRAPPIST-1 e",
        disposition="CONFIRMED",
        orbital_period_days="6.1",
        ra_deg="346.6",
        dec_deg="-5.0",
        question="How many Earth-sized planets are in the TRAPPIST-1 system?",
        wrong_choice="Three",
        correct_choice="Seven",
    ),
    TriviaQuestion(
        planet_name="Proxima Centauri b",
        disposition="CONFIRMED",
        orbital_period_days="11.2",
        ra_deg="217.4",
        dec_deg="-62.6",
        question=(
            "Proxima Centauri b orbits the closest star to our Sun. "
            "What is that star's name?"
        ),
        wrong_choice="Sirius",
        correct_choice="Proxima Centauri",
    ),
    TriviaQuestion(
        planet_name="55 Cancri e",
        disposition="CONFIRMED",
        orbital_period_days="0.7",
        ra_deg="131.8",
        dec_deg="28.3",
        question="What is the nickname for the exoplanet 55 Cancri e?",
        wrong_choice="The Water World",
        correct_choice="The Diamond Planet",
    ),
)


def load_questions(path: Path) -> list[TriviaQuestion]:
    """
    Load a question bank from CSV.

    Args:
        path: CSV with the columns in QUESTION_COLUMNS.

    Returns:
        Questions in file order; rows without a question or answers are skipped.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If required columns are missing.
    """
    if not path.exists():
        msg = f"Question bank not found: {path}"
        raise FileNotFoundError(msg)

    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [str(col).strip() for col in df.columns]

    missing = [col for col in REQUIRED_QUESTION_COLUMNS if col not in df.columns]
    if missing:
        msg = f"Question bank is missing columns: {missing}"
        raise ValueError(msg)

    present = {src: dst for src, dst in QUESTION_COLUMNS.items() if src in df.columns}
    df = df[list(present)].rename(columns=present)
    df = df.apply(lambda col: col.str.strip())

    complete = (
        (df["question"] != "") & (df["wrong_choice"] != "") & (df["correct_choice"] != "")
    )
    if not complete.all():
        log.warning("Skipping incomplete questions", rows=int((~complete).sum()))

    questions = [TriviaQuestion(**row) for row in df[complete].to_dict(orient="records")]
    log.info("Loaded question bank", path=str(path), questions=len(questions))
    return questions
