"""
Score persistence and leaderboard.

The scores and users tables belong to the backend; only their column
names are relied on here: scores(user_id, username, score) and users(id,
username).
"""

from dataclasses import dataclass

from exohunt.config.settings import QuizConfig
from exohunt.store.base import RowStore
from exohunt.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class LeaderboardEntry:
    """One leaderboard line."""

    name: str
    score: int


@dataclass(frozen=True)
class SaveOutcome:
    """
    Result of trying to save a score.

    Attributes:
        saved: Whether a new row was written.
        message: Confirmation shown to the player.
        error: Error shown to the player instead of the message.
    """

    saved: bool = False
    message: str = ""
    error: str | None = None


class Leaderboard:
    """Reads and writes game scores through a row store."""

    def __init__(self, store: RowStore, config: QuizConfig | None = None) -> None:
        self.store = store
        self.config = config or QuizConfig()

    def top(self) -> list[LeaderboardEntry]:
        """
        Highest scores, best first.

        Returns:
            Up to ``leaderboard_size`` entries; empty if the store fails.
        """
        result = self.store.select(
            self.config.scores_table,
            ["username", "score"],
            order_by="score",
            limit=self.config.leaderboard_size,
        )
        if not result.ok:
            log.warning("Could not load leaderboard", error=result.error)
            return []
        return [
            LeaderboardEntry(name=str(row.get("username", "")), score=int(row["score"]))
            for row in result.data
            if row.get("score") is not None
        ]

    def high_score(self, username: str) -> int:
        """
        Best saved score of a player (0 if none).

        Raises:
            RuntimeError: If the store cannot be read.
        """
        result = self.store.select(
            self.config.scores_table,
            ["score"],
            equals={"username": username},
            order_by="score",
            limit=1,
        )
        if not result.ok:
            msg = f"Could not read scores: {result.error}"
            raise RuntimeError(msg)
        if not result.data or result.data[0].get("score") is None:
            return 0
        return int(result.data[0]["score"])

    def _user_id(self, username: str) -> str:
        """Look up the player's id, falling back to the username."""
        result = self.store.select(
            self.config.users_table,
            ["id"],
            equals={"username": username},
            limit=1,
        )
        if result.ok and result.data and result.data[0].get("id") is not None:
            return str(result.data[0]["id"])
        return username

    def save_score(self, username: str, score: int) -> SaveOutcome:
        """
        Save a score if it beats the player's best.

        Args:
            username: Player name; surrounding whitespace is ignored.
            score: Final game score.

        Returns:
            SaveOutcome with a message or an error for the player.
        """
        name = username.strip()
        if not name:
            return SaveOutcome(error="Please enter a username before saving.")

        try:
            current_high = self.high_score(name)
        except RuntimeError as e:
            log.error("Score save failed", username=name, error=str(e))
            return SaveOutcome(error=str(e))

        if score <= current_high:
            return SaveOutcome(message="Score not saved - not a new high score")

        row = {"user_id": self._user_id(name), "username": name, "score": score}
        result = self.store.insert(self.config.scores_table, [row])
        if not result.ok:
            log.error("Score insert failed", username=name, error=result.error)
            return SaveOutcome(error=f"Could not save score: {result.error}")

        log.info("Saved high score", username=name, score=score)
        return SaveOutcome(saved=True, message="New high score saved!")
