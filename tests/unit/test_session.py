"""RatingSession screen flow and Home form behaviour."""

from __future__ import annotations

import pytest

from cinerate.config import Settings
from cinerate.config.loader import EntryRulesConfig, PresentationConfig
from cinerate.domain.category_view import PresentationMode
from cinerate.domain.entrystore import Category, EntryStore, RejectionReason
from cinerate.session import RatingSession, Screen, SessionStateError, build_session

pytestmark = [pytest.mark.session]


def _fill(session: RatingSession, name: str, rating: int, comment: str = "") -> None:
    session.set_name(name)
    session.set_rating(rating)
    session.set_comment(comment)


def test_new_session_starts_on_home_with_blank_draft() -> None:
    session = RatingSession(EntryStore())

    assert session.screen is Screen.HOME
    assert session.draft.name == ""
    assert session.draft.rating == 0
    assert session.draft.comment == ""
    assert session.draft.category is Category.ANIME


def test_screens_toggle_indefinitely() -> None:
    session = RatingSession(EntryStore())

    for _ in range(3):
        assert session.view_ratings() is Screen.RATINGS
        assert session.go_back() is Screen.HOME


def test_transition_from_wrong_screen_raises() -> None:
    session = RatingSession(EntryStore())

    with pytest.raises(SessionStateError) as exc:
        session.go_back()

    assert exc.value.action == "go_back"
    assert exc.value.screen is Screen.HOME
    session.view_ratings()
    with pytest.raises(SessionStateError):
        session.view_ratings()


def test_groups_only_available_on_ratings_screen() -> None:
    session = RatingSession(EntryStore())

    with pytest.raises(SessionStateError):
        session.groups()

    session.view_ratings()
    groups = session.groups()
    assert all(group.mode is PresentationMode.EMPTY for group in groups.values())


def test_submit_clears_draft_but_keeps_category() -> None:
    session = RatingSession(EntryStore())
    session.select_category("Movie")
    _fill(session, "Heat", 9, "Classic")

    result = session.submit()

    assert result.accepted
    assert session.draft.name == ""
    assert session.draft.rating == 0
    assert session.draft.comment == ""
    assert session.draft.category is Category.MOVIE
    assert len(session.store) == 1


def test_rejected_submit_keeps_draft() -> None:
    session = RatingSession(EntryStore())
    _fill(session, "Naruto", 8, "Great")
    session.submit()
    _fill(session, "naruto", 7, "Again")

    result = session.submit()

    assert result.reason is RejectionReason.DUPLICATE
    assert result.alert is not None
    assert result.alert.message == "This anime has already been rated."
    assert session.draft.name == "naruto"
    assert session.draft.rating == 7


def test_submit_without_rating_is_silent_incomplete() -> None:
    session = RatingSession(EntryStore())
    session.set_name("Naruto")

    result = session.submit()

    assert result.reason is RejectionReason.INCOMPLETE
    assert result.alert is None
    assert len(session.store) == 0


def test_submit_is_not_available_on_ratings_screen() -> None:
    session = RatingSession(EntryStore())
    session.view_ratings()

    with pytest.raises(SessionStateError):
        session.submit()


@pytest.mark.parametrize("rating", [0, 11, -3])
def test_set_rating_rejects_out_of_range(rating: int) -> None:
    session = RatingSession(EntryStore())

    with pytest.raises(ValueError):
        session.set_rating(rating)
    assert session.draft.rating == 0


def test_set_comment_ignores_edit_past_limit() -> None:
    session = RatingSession(EntryStore())

    assert session.set_comment("x" * 100)
    assert not session.set_comment("x" * 101)

    assert session.draft.comment == "x" * 100
    assert session.char_count_label == "100/100"


def test_labels_follow_selected_category() -> None:
    session = RatingSession(EntryStore())
    session.select_category(Category.SHOW)

    assert session.name_placeholder == "Enter Show name..."
    assert session.add_button_label == "+ Add Show"
    assert session.char_count_label == "0/100"


def test_select_category_rejects_unknown_value() -> None:
    session = RatingSession(EntryStore())

    with pytest.raises(ValueError):
        session.select_category("Podcast")


def test_build_session_applies_settings() -> None:
    settings = Settings(
        rules=EntryRulesConfig(comment_max_length=5),
        presentation=PresentationConfig(scroll_threshold=2, viewport_rows=2),
    )
    session = build_session(settings)
    _fill(session, "Dark", 9)
    session.submit()
    _fill(session, "Lost", 6)
    session.submit()

    assert session.store.comment_max_length == 5
    session.view_ratings()
    assert session.groups()[Category.ANIME].mode is PresentationMode.SCROLLABLE


def test_end_to_end_three_movies() -> None:
    session = RatingSession(EntryStore())
    session.select_category(Category.MOVIE)
    for name in ("Heat", "Alien", "Brazil"):
        _fill(session, name, 8)
        assert session.submit().accepted

    session.view_ratings()
    groups = session.groups()

    movie = groups[Category.MOVIE]
    assert movie.mode is PresentationMode.SCROLLABLE
    assert [item.name for item in movie.items] == ["Heat", "Alien", "Brazil"]
    assert groups[Category.ANIME].mode is PresentationMode.EMPTY
    assert groups[Category.SHOW].mode is PresentationMode.EMPTY


def test_sessions_keep_independent_metrics() -> None:
    first = build_session(Settings())
    second = build_session(Settings())
    for name in ("Naruto", "Bleach", "Frieren"):
        _fill(first, name, 8)
        assert first.submit().accepted
    _fill(second, "Naruto", 8)
    assert second.submit().accepted

    assert first.session_id != second.session_id
    assert first.store.metrics is not second.store.metrics
    assert first.store.metrics.snapshot() == {
        "counters": {"entries_created_total": 3},
        "gauges": {"entries_anime_total": 3},
    }
    assert second.store.metrics.snapshot() == {
        "counters": {"entries_created_total": 1},
        "gauges": {"entries_anime_total": 1},
    }
