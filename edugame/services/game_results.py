"""
Game result pruning.

Faculty can trim a student's history in two ways:
1. keep only the most recent attempts of every game
2. drop every attempt of one game

Both return a new list and never touch storage; the caller persists it.
"""

from collections.abc import Iterable
from datetime import datetime, timezone

from edugame.models.game_result import GameResult

RECENT_RESULTS_PER_GAME = 3


def _sort_key(moment: datetime | None) -> datetime:
    if moment is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    if moment.tzinfo is None:
        # SQLite hands timestamps back without an offset; they are stored as UTC.
        return moment.replace(tzinfo=timezone.utc)
    return moment


def keep_recent_results(results: Iterable[GameResult], per_game: int = RECENT_RESULTS_PER_GAME) -> list[GameResult]:
    """
    Keep the newest ``per_game`` results of every game.

    Games are emitted in lexicographic order of their name and each game's
    results newest first, so the output does not depend on insertion order.
    """
    games: dict[str, list[GameResult]] = {}
    for result in results:
        games.setdefault(result.game_name, []).append(result)

    kept: list[GameResult] = []
    for game_name in sorted(games):
        newest_first = sorted(games[game_name], key=lambda result: _sort_key(result.date), reverse=True)
        kept.extend(newest_first[:per_game])
    return kept


def drop_game_results(results: Iterable[GameResult], game_name: str) -> list[GameResult]:
    return [result for result in results if result.game_name != game_name]


def build_game_result(
    game_name: str,
    score: float,
    completion_time: float,
    total_questions: int,
    accuracy: float | None = None,
    now: datetime | None = None,
) -> GameResult:
    return GameResult(
        game_name=game_name,
        score=score,
        completion_time=completion_time,
        total_questions=total_questions,
        accuracy=accuracy,
        date=now or datetime.now(timezone.utc),
    )
