# SPDX-License-Identifier: MIT

import pendulum
import pytest

from cadence.service.summary import (
    DUE_NOW,
    NEVER_REVIEWED,
    format_elapsed,
    format_remaining,
    render_cadence_summary,
)


class TestRenderCadenceSummary:
    def test_without_rule_describes_fallback(self):
        assert render_cadence_summary(None) == "Review every 12 hours"
        assert render_cadence_summary(None, 6) == "Review every 6 hours"

    @pytest.mark.parametrize(
        "hours, minutes, expected",
        [
            (4, 30, "Review every 4h 30m"),
            (48, 0, "Review every 48h"),
            (0, 45, "Review every 45m"),
            (0, 0, "Review every 12h"),
        ],
    )
    def test_interval(self, make_rule, hours, minutes, expected):
        rule = make_rule("every-x-hours", hours=hours, minutes=minutes)
        assert render_cadence_summary(rule) == expected

    def test_daily(self, make_rule):
        rule = make_rule("daily", time="07:30")
        assert render_cadence_summary(rule) == "Review daily at 07:30"

    def test_daily_without_time_shows_default(self, make_rule):
        assert render_cadence_summary(make_rule("daily")) == "Review daily at 09:00"

    def test_weekly(self, make_rule):
        rule = make_rule("weekly", time="09:00", weekdays=[1, 3])
        summary = render_cadence_summary(rule)
        assert summary == "Review weekly on Monday, Wednesday at 09:00"

    def test_weekly_without_days(self, make_rule):
        rule = make_rule("weekly", time="09:00", weekdays=[])
        assert render_cadence_summary(rule) == "Review weekly on all days at 09:00"

    def test_monthly(self, make_rule):
        rule = make_rule("monthly", time="10:00", day_of_month=15)
        assert render_cadence_summary(rule) == "Review monthly on day 15 at 10:00"

    def test_yearly(self, make_rule):
        rule = make_rule("yearly", time="08:00", day_of_month=29, month=2)
        assert render_cadence_summary(rule) == "Review yearly on 29/2 at 08:00"

    def test_date_window_is_appended(self, make_rule):
        rule = make_rule(
            "daily",
            time="09:00",
            start_date=pendulum.date(2024, 1, 1),
            end_date=pendulum.date(2024, 12, 31),
        )
        assert render_cadence_summary(rule) == (
            "Review daily at 09:00 • Starts: 2024-01-01 • Ends: 2024-12-31"
        )


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "0 seconds ago"),
        (59, "59 seconds ago"),
        (60, "1 minutes ago"),
        (3599, "59 minutes ago"),
        (3600, "1 hours ago"),
        (86399, "23 hours ago"),
        (86400 * 3, "3 days ago"),
    ],
)
def test_format_elapsed(seconds, expected):
    assert format_elapsed(pendulum.duration(seconds=seconds)) == expected


def test_format_elapsed_never_reviewed():
    assert format_elapsed(None) == NEVER_REVIEWED


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, DUE_NOW),
        (30, "in <1m"),
        (5 * 60, "in 5m"),
        (2 * 3600 + 5 * 60, "in 2h 5m"),
        (86400 + 3600, "in 1d 1h 0m"),
    ],
)
def test_format_remaining(seconds, expected):
    assert format_remaining(pendulum.duration(seconds=seconds)) == expected
