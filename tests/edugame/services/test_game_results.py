from datetime import datetime, timedelta, timezone

from edugame.services.game_results import build_game_result, drop_game_results, keep_recent_results

BASE_TIME = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def _result(game_name: str, minute: int):
    return build_game_result(
        game_name=game_name,
        score=minute,
        completion_time=30,
        total_questions=10,
        now=BASE_TIME + timedelta(minutes=minute),
    )


def _summary(results) -> list[tuple[str, float]]:
    return [(result.game_name, result.score) for result in results]


def test_keep_recent_results_keeps_three_newest_per_game() -> None:
    results = [_result('quiz1', minute) for minute in (3, 0, 4, 1, 2)] + [_result('quiz2', 7), _result('quiz2', 5)]

    kept = keep_recent_results(results)

    assert _summary(kept) == [('quiz1', 4), ('quiz1', 3), ('quiz1', 2), ('quiz2', 7), ('quiz2', 5)]


def test_keep_recent_results_orders_games_by_name_not_first_seen() -> None:
    results = [_result('zeta', 1), _result('alpha', 2), _result('mid', 3)]

    assert [result.game_name for result in keep_recent_results(results)] == ['alpha', 'mid', 'zeta']


def test_keep_recent_results_treats_naive_dates_as_utc() -> None:
    naive = _result('quiz1', 10)
    naive.date = naive.date.replace(tzinfo=None)
    aware = _result('quiz1', 5)

    assert _summary(keep_recent_results([aware, naive], per_game=1)) == [('quiz1', 10)]


def test_keep_recent_results_handles_empty_history() -> None:
    assert keep_recent_results([]) == []


def test_drop_game_results_removes_exact_matches_only() -> None:
    results = [_result('quiz1', 0), _result('Quiz1', 1), _result('quiz2', 2), _result('quiz1', 3)]

    assert _summary(drop_game_results(results, 'quiz1')) == [('Quiz1', 1), ('quiz2', 2)]


def test_build_game_result_stamps_current_time_by_default() -> None:
    before = datetime.now(timezone.utc)

    result = build_game_result(game_name='quiz1', score=5, completion_time=12.5, total_questions=10, accuracy=50)

    assert before <= result.date <= datetime.now(timezone.utc)
    assert result.accuracy == 50
    assert result.student_id is None
