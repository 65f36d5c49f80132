# SPDX-License-Identifier: MIT

import pendulum
import pytest

from cadence.model.review_state import ReviewState
from cadence.repository.note import NoteRepository
from cadence.repository.review_ledger import InMemoryReviewLedger
from cadence.service import codec, watchlist
from cadence.service.watchlist import CadenceValidationError, build_rule
from cadence.template.note import get_note_template


@pytest.fixture
def repo() -> NoteRepository:
    return NoteRepository()


@pytest.fixture
def ledger() -> InMemoryReviewLedger:
    return InMemoryReviewLedger()


def _add(repo: NoteRepository, text: str) -> str:
    note = get_note_template()
    note["text"] = text
    return repo.save_new_note(note)


class TestBuildRule:
    def test_interval_from_hours_and_days(self):
        rule = build_rule("every-x-hours", hours=2, minutes=15, interval_days=1)
        assert rule["kind"] == "every-x-hours"
        assert rule["hours"] == 26
        assert rule["minutes"] == 15

    def test_calendar_kinds_use_nominal_hours(self):
        assert build_rule("daily", hours=3, time="8:00")["hours"] == 24
        rule = build_rule("weekly", time="09:00", weekdays=[1, 1, 3])
        assert rule["hours"] == 168
        assert rule["minutes"] == 0
        assert rule["weekdays"] == [1, 3]

    def test_time_is_normalized(self):
        assert build_rule("daily", time="8:05")["time"] == "08:05"

    def test_dates_are_kept(self):
        rule = build_rule(
            "monthly",
            time="09:00",
            day_of_month=31,
            start_date=pendulum.date(2024, 1, 1),
            end_date=pendulum.date(2024, 12, 31),
        )
        assert rule["day_of_month"] == 31
        assert rule["start_date"] == pendulum.date(2024, 1, 1)
        assert rule["end_date"] == pendulum.date(2024, 12, 31)

    @pytest.mark.parametrize(
        "kind, kwargs",
        [
            ("hourly", {}),
            ("every-x-hours", {}),
            ("every-x-hours", {"hours": -1}),
            ("every-x-hours", {"hours": 0, "minutes": 0}),
            ("daily", {"time": "24:00"}),
            ("daily", {"time": "noon"}),
            ("weekly", {"time": "09:00"}),
            ("weekly", {"time": "09:00", "weekdays": [7]}),
            ("monthly", {"day_of_month": 0}),
            ("monthly", {"day_of_month": 32}),
            ("yearly", {"month": 13, "day_of_month": 1}),
            (
                "daily",
                {
                    "start_date": pendulum.date(2024, 2, 1),
                    "end_date": pendulum.date(2024, 1, 1),
                },
            ),
        ],
    )
    def test_invalid_settings(self, kind, kwargs):
        with pytest.raises(CadenceValidationError):
            build_rule(kind, **kwargs)


class TestWatching:
    def test_set_cadence_adds_watch_tag(self, repo, make_rule):
        id = _add(repo, "Check smoke detectors")
        rule = make_rule("monthly", hours=720, time="09:00", day_of_month=1)

        text = watchlist.set_cadence(id, rule, repo)

        assert codec.is_watched(text)
        assert codec.decode_from_text(text) == rule
        assert text.startswith("Check smoke detectors\n")

    def test_set_cadence_twice_keeps_one_line(self, repo, make_rule):
        id = _add(repo, "Stretch")
        watchlist.set_cadence(id, make_rule("every-x-hours", hours=1), repo)
        text = watchlist.set_cadence(id, make_rule("every-x-hours", hours=2), repo)

        cadence_lines = [
            line for line in text.split("\n") if line.startswith("meta::review_cadence")
        ]
        assert len(cadence_lines) == 1
        assert text.count("meta::watch") == 1

    def test_unwatch_removes_tag_and_cadence(self, repo, make_rule):
        id = _add(repo, "Journal")
        watchlist.set_cadence(id, make_rule("daily", hours=24, time="21:00"), repo)

        text = watchlist.unwatch(id, repo)

        assert text == "Journal"
        assert not codec.is_watched(text)

    def test_watch_is_idempotent(self, repo):
        id = _add(repo, "Inbox zero")
        watchlist.watch(id, repo)
        assert watchlist.watch(id, repo) == "Inbox zero\nmeta::watch"


class TestWatchlist:
    def test_only_live_watched_notes_are_listed(self, repo, ledger, utc):
        watched = _add(repo, "watched\nmeta::watch")
        _add(repo, "not watched")
        deleted = _add(repo, "deleted\nmeta::watch")
        repo.delete_note(deleted)

        statuses = watchlist.get_watchlist(
            repo.get_all_notes(), ledger, utc(2024, 1, 1)
        )

        assert [status["note_id"] for status in statuses] == [watched]

    def test_status_of_interval_note(self, repo, ledger, utc):
        id = _add(
            repo,
            "Hydrate\nmeta::watch\n"
            "meta::review_cadence::type=every-x-hours;hours=4;minutes=0",
        )
        ledger.record_review(id, utc(2024, 1, 1, 10, 0))

        status = watchlist.get_watch_status(
            repo.get_note(id), ledger, utc(2024, 1, 1, 15, 0)
        )

        assert status["next_due"] == utc(2024, 1, 1, 14, 0)
        assert status["state"] == ReviewState.OVERDUE
        assert status["overdue_by"].total_seconds() == 3600
        assert status["remaining"].total_seconds() == 0
        assert status["rule"] is not None

    def test_note_without_cadence_uses_fallback(self, repo, ledger, utc):
        id = _add(repo, "Plain\nmeta::watch")
        ledger.record_review(id, utc(2024, 1, 1, 0, 0))

        status = watchlist.get_watch_status(
            repo.get_note(id), ledger, utc(2024, 1, 1, 1, 0), fallback_hours=12
        )

        assert status["rule"] is None
        assert status["next_due"] == utc(2024, 1, 1, 12, 0)
        assert status["state"] == ReviewState.PENDING

    def test_sorted_by_next_due(self, repo, ledger, utc):
        later = _add(
            repo,
            "later\nmeta::watch\n"
            "meta::review_cadence::type=every-x-hours;hours=8;minutes=0",
        )
        sooner = _add(
            repo,
            "sooner\nmeta::watch\n"
            "meta::review_cadence::type=every-x-hours;hours=2;minutes=0",
        )
        now = utc(2024, 1, 1, 10, 0)
        ledger.record_review(later, now)
        ledger.record_review(sooner, now)

        statuses = watchlist.get_watchlist(repo.get_all_notes(), ledger, now)

        assert [status["note_id"] for status in statuses] == [sooner, later]

    def test_find_overdue(self, repo, ledger, utc):
        interval = "meta::review_cadence::type=every-x-hours;hours=1;minutes=0"
        slightly = _add(repo, f"slightly\nmeta::watch\n{interval}")
        very = _add(repo, f"very\nmeta::watch\n{interval}")
        pending = _add(repo, f"pending\nmeta::watch\n{interval}")
        dismissed = _add(
            repo, f"dismissed\nmeta::watch\nmeta::reminder_dismissed\n{interval}"
        )
        now = utc(2024, 1, 1, 12, 0)
        ledger.record_review(slightly, utc(2024, 1, 1, 10, 30))
        ledger.record_review(very, utc(2024, 1, 1, 8, 0))
        ledger.record_review(pending, utc(2024, 1, 1, 11, 30))
        ledger.record_review(dismissed, utc(2024, 1, 1, 1, 0))

        statuses = watchlist.find_overdue(repo.get_all_notes(), ledger, now)

        assert [status["note_id"] for status in statuses] == [very, slightly]

    def test_snoozed_note_returns_once_snooze_ends(self, repo, ledger, utc):
        interval = "meta::review_cadence::type=every-x-hours;hours=1;minutes=0"
        id = _add(repo, f"Pay rent\nmeta::watch\n{interval}")
        ledger.record_review(id, utc(2024, 1, 1, 8, 0))
        until = utc(2024, 1, 1, 12, 0)
        watchlist.snooze(id, until, repo)

        def overdue_ids(now):
            statuses = watchlist.find_overdue(repo.get_all_notes(), ledger, now)
            return [status["note_id"] for status in statuses]

        assert overdue_ids(until.subtract(seconds=1)) == []
        assert overdue_ids(until) == [id]

        watchlist.snooze(id, utc(2024, 1, 2), repo)
        assert overdue_ids(until) == []
        watchlist.unsnooze(id, repo)
        assert overdue_ids(until) == [id]

    def test_count_by_state(self, repo, ledger, utc):
        interval = "meta::review_cadence::type=every-x-hours;hours=1;minutes=0"
        _add(repo, f"fresh\nmeta::watch\n{interval}")
        overdue = _add(repo, f"overdue\nmeta::watch\n{interval}")
        ledger.record_review(overdue, utc(2024, 1, 1))

        statuses = watchlist.get_watchlist(
            repo.get_all_notes(), ledger, utc(2024, 1, 2)
        )

        assert watchlist.count_by_state(statuses) == {
            "fresh": 1,
            "pending": 0,
            "overdue": 1,
        }


def test_mark_reviewed_and_forget(ledger, utc):
    at = utc(2024, 1, 1, 9, 0)
    assert watchlist.mark_reviewed("a", ledger, at) == at
    assert ledger.last_reviewed("a") == at
    assert watchlist.forget_review("a", ledger) is True
    assert watchlist.forget_review("a", ledger) is False
