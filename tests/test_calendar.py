"""Tests for WorkdayCalendar: is_workday, workday_span, project_end.

Test data loaded from: data/fixtures/scenarios/workday_span.json
                       data/fixtures/scenarios/project_end.json
"""

from __future__ import annotations

from datetime import date

import pytest

from conftest import DAYS, load_scenarios, make_calendar, parse_point, point

_spans = load_scenarios("workday_span")
_ends = load_scenarios("project_end")


class TestIsWorkday:
    """Resolution order: custom holiday, national holiday, weekday flag."""

    def test_weekday_flags(self, standard_calendar):
        working = [standard_calendar.is_workday(DAYS[d]) for d in (
            "mon", "tue", "wed", "thu", "fri", "sat", "sun",
        )]
        assert working == [True, True, True, True, True, False, False]

    def test_national_holiday_off(self, standard_calendar):
        # Mon 2024-07-15, Marine Day
        assert standard_calendar.is_workday(date(2024, 7, 15)) is False

    def test_national_holiday_worked_on_weekend(self):
        # Sat 2024-05-04 is a holiday; the holiday flag wins over Saturday's
        cal = make_calendar("holidays_worked")
        assert cal.is_workday(date(2024, 5, 4)) is True

    def test_custom_holiday_off(self, custom_calendar):
        assert custom_calendar.is_workday(DAYS["wed"]) is False

    def test_custom_holiday_worked(self):
        cal = make_calendar("custom_worked")
        assert cal.is_workday(DAYS["sat"]) is True

    def test_custom_holiday_beats_national(self):
        from timeline_primitives.calendar import WorkdayCalendar, WorkdayConfig

        marine_day = date(2024, 7, 15)
        cal = WorkdayCalendar(
            WorkdayConfig(holidays=False, custom=True),
            custom_holidays=[marine_day],
        )
        assert cal.is_workday(marine_day) is True

    def test_event_never_affects_status(self, custom_calendar):
        assert custom_calendar.is_event(DAYS["thu"])
        assert custom_calendar.is_workday(DAYS["thu"]) is True

    def test_holiday_display_helpers(self, custom_calendar):
        assert custom_calendar.is_holiday(DAYS["wed"])
        assert custom_calendar.is_custom_holiday(DAYS["wed"])
        assert custom_calendar.is_holiday(date(2024, 1, 1))
        assert not custom_calendar.is_custom_holiday(date(2024, 1, 1))
        assert not custom_calendar.is_holiday(DAYS["thu"])

    def test_workdays_in_range(self, standard_calendar):
        result = list(standard_calendar.workdays_in_range(DAYS["thu"], DAYS["next_mon"]))
        assert result == [DAYS["thu"], DAYS["fri"], DAYS["next_mon"]]


class TestWorkdaySpan:

    @pytest.mark.parametrize("spec", _spans, ids=lambda s: s["id"])
    def test_workday_span(self, spec):
        cal = make_calendar(spec["calendar"])
        result = cal.workday_span(parse_point(spec["start"]), parse_point(spec["end"]))
        assert result == spec["expected"], spec["notes"]

    def test_sunday_pm_regression(self, standard_calendar):
        """A PM start on a non-working day must not lose half a day."""
        result = standard_calendar.workday_span(
            point("2024-02-18", "PM"), point("2024-02-19", "PM"),
        )
        assert result == 1.0


class TestProjectEnd:

    @pytest.mark.parametrize("spec", _ends, ids=lambda s: s["id"])
    def test_project_end(self, spec):
        cal = make_calendar(spec["calendar"])
        result = cal.project_end(parse_point(spec["start"]), spec["span"])
        assert result == parse_point(spec["expected"]), spec["notes"]

    @pytest.mark.parametrize(
        "spec",
        [s for s in _ends if s["span"] > 0],
        ids=lambda s: s["id"],
    )
    def test_round_trip(self, spec):
        """workday_span(start, project_end(start, s)) == s."""
        cal = make_calendar(spec["calendar"])
        start = parse_point(spec["start"])
        end = cal.project_end(start, spec["span"])
        assert cal.workday_span(start, end) == spec["span"]


class TestConfiguration:

    def test_no_working_weekday_rejected(self):
        from timeline_primitives.calendar import WorkdayCalendar, WorkdayConfig
        from timeline_primitives.types import CalendarError

        # Custom holidays alone are a finite set, so they cannot rescue it
        off = WorkdayConfig(
            monday=False, tuesday=False, wednesday=False, thursday=False,
            friday=False, saturday=False, sunday=False, custom=True,
        )
        with pytest.raises(CalendarError, match="weekday"):
            WorkdayCalendar(off, custom_holidays=[DAYS["wed"]])

    def test_only_national_holidays_worked(self):
        from timeline_primitives.calendar import WorkdayCalendar, WorkdayConfig
        from timeline_primitives.types import CalendarPoint, Timing

        holidays_only = WorkdayConfig(
            monday=False, tuesday=False, wednesday=False, thursday=False,
            friday=False, saturday=False, sunday=False, holidays=True,
        )
        cal = WorkdayCalendar(holidays_only)
        assert cal.is_workday(date(2024, 7, 15))        # Marine Day
        assert not cal.is_workday(date(2024, 7, 16))

        # Marine Day (07-15), then Mountain Day on Sunday 08-11
        start = CalendarPoint(date(2024, 7, 1), Timing.AM)
        assert cal.project_end(start, 2) == CalendarPoint(date(2024, 8, 11), Timing.PM)

    def test_overlapping_custom_dates_rejected(self):
        from timeline_primitives.calendar import WorkdayCalendar
        from timeline_primitives.types import CalendarError

        with pytest.raises(CalendarError, match="2024-06-05"):
            WorkdayCalendar(
                custom_holidays=[DAYS["wed"]], custom_events=[DAYS["wed"]],
            )

    def test_calendar_error_is_value_error(self):
        from timeline_primitives.types import CalendarError

        assert issubclass(CalendarError, ValueError)

    def test_default_config_is_mon_to_fri(self):
        from timeline_primitives.calendar import WorkdayCalendar

        cal = WorkdayCalendar()
        assert cal.config.working_weekdays == (0, 1, 2, 3, 4)
        assert cal.config.holidays is False
        assert cal.config.custom is False
