from datetime import date, time

import pytest

from src.labor_time.labor_time.absences.model import Absence, Holiday
from src.labor_time.labor_time.core.enums import AbsenceStatus, DayClassification, PunchType
from src.labor_time.labor_time.core.exceptions import InvalidDateRangeError

MONDAY = date(2025, 3, 3)


@pytest.fixture
def office(world):
    """08:00-17:00, 10 min tolerance, compensation allowed."""
    world.add_schedule(1, entry=time(8, 0), exit=time(17, 0), tolerance=10)
    world.assign(7, 1, date(2025, 1, 1))
    return world


def analyze(world, work_date=MONDAY, employee_id=7):
    return world.services().attendance_service.analyze_day(employee_id=employee_id, work_date=work_date)


def test_late_entry_compensated_by_staying_longer(office):
    office.day(7, MONDAY, (8, 25), (17, 40))

    outcome = analyze(office)

    assert outcome.classification == DayClassification.LATE_COMPENSATED
    assert outcome.raw_late_minutes == 25
    assert outcome.net_late_minutes == 0
    assert outcome.overtime_minutes == 40
    assert outcome.net_overtime_minutes == 15
    assert outcome.diurnal_overtime_minutes == 40
    assert outcome.first_entry_local == time(8, 25)
    assert outcome.last_exit_local == time(17, 40)


def test_late_entry_without_full_span_is_uncompensated(office):
    office.day(7, MONDAY, (8, 25), (17, 10))

    outcome = analyze(office)

    assert outcome.classification == DayClassification.LATE_UNCOMPENSATED
    assert outcome.net_late_minutes == 25
    assert outcome.overtime_minutes == 10
    assert outcome.net_overtime_minutes == 10


def test_late_entry_on_schedule_without_compensation(world):
    world.add_schedule(2, entry=time(8, 0), exit=time(17, 0), tolerance=10, compensation=False)
    world.assign(7, 2, date(2025, 1, 1))
    world.day(7, MONDAY, (8, 25), (17, 40))

    outcome = analyze(world)

    assert outcome.classification == DayClassification.LATE_UNCOMPENSATED
    assert outcome.net_late_minutes == 25
    assert outcome.net_overtime_minutes == 40


def test_entry_at_tolerance_edge_is_punctual(office):
    office.day(7, MONDAY, (8, 10), (17, 0))

    outcome = analyze(office)

    assert outcome.classification == DayClassification.PUNCTUAL
    assert outcome.raw_late_minutes == 10
    assert outcome.net_late_minutes == 0


def test_entry_one_second_past_tolerance_is_late(office):
    office.punch(7, PunchType.ENTRY, MONDAY, 8, 10, 1)
    office.punch(7, PunchType.EXIT, MONDAY, 17, 0)

    outcome = analyze(office)

    assert outcome.is_late
    assert outcome.raw_late_minutes == 10


def test_evening_shift_premium(world):
    world.add_schedule(3, entry=time(14, 0), exit=time(22, 0))
    world.assign(7, 3, date(2025, 1, 1))
    world.day(7, MONDAY, (14, 0), (22, 0))

    outcome = analyze(world)

    assert outcome.classification == DayClassification.PUNCTUAL
    assert outcome.ordinary_nocturnal_premium_hours == 3.0
    assert outcome.overtime_minutes == 0


def test_early_arrival_on_day_shift_earns_no_premium(office):
    office.day(7, MONDAY, (5, 30), (17, 0))

    outcome = analyze(office)

    assert outcome.classification == DayClassification.PUNCTUAL
    assert outcome.ordinary_nocturnal_premium_minutes == 0
    assert outcome.overtime_minutes == 0


def test_non_laborable_holiday_ignores_punches(office):
    office.holidays.holidays.append(Holiday(holiday_date=MONDAY, name="Festivo"))
    office.day(7, MONDAY, (8, 0), (20, 0))

    outcome = analyze(office)

    assert outcome.classification == DayClassification.HOLIDAY
    assert not outcome.counts_for_totals
    assert outcome.overtime_minutes == 0
    assert outcome.holiday_name == "Festivo"


def test_laborable_holiday_is_classified_normally_with_note(office):
    office.holidays.holidays.append(Holiday(holiday_date=MONDAY, name="Company day", laborable=True))
    office.day(7, MONDAY, (8, 0), (17, 0))

    outcome = analyze(office)

    assert outcome.classification == DayClassification.PUNCTUAL
    assert "Company day" in outcome.note
    assert outcome.laborable_holiday


def test_approved_absence_wins_over_everything(office):
    office.absences.absences.append(
        Absence(
            employee_id=7, date_from=MONDAY, date_to=MONDAY, status=AbsenceStatus.APPROVED, kind="vacation", absence_id=1
        )
    )
    office.holidays.holidays.append(Holiday(holiday_date=MONDAY, name="Festivo"))
    office.day(7, MONDAY, (8, 30), (17, 0))

    outcome = analyze(office)

    assert outcome.classification == DayClassification.ABSENT
    assert outcome.raw_late_minutes == 0


def test_absence_without_a_decision_does_not_excuse_the_day(office):
    absence = Absence(employee_id=7, date_from=MONDAY, date_to=MONDAY, kind="vacation", absence_id=2)
    office.absences.absences.append(absence)
    office.day(7, MONDAY, (8, 0), (17, 0))

    outcome = analyze(office)

    assert absence.status == AbsenceStatus.PENDING
    assert not absence.approved
    assert outcome.classification == DayClassification.PUNCTUAL


def test_no_assignment_is_no_schedule(world):
    world.day(7, MONDAY, (8, 0), (17, 0))

    outcome = analyze(world)

    assert outcome.classification == DayClassification.NO_SCHEDULE
    assert not outcome.counts_for_totals


def test_missing_exit_is_incomplete_but_reports_lateness(office):
    office.punch(7, PunchType.ENTRY, MONDAY, 8, 30)

    outcome = analyze(office)

    assert outcome.classification == DayClassification.INCOMPLETE
    assert outcome.raw_late_minutes == 30
    assert outcome.net_late_minutes == 0
    assert outcome.overtime_minutes == 0
    assert outcome.irregularities == 1


def test_missing_entry_is_incomplete(office):
    office.punch(7, PunchType.EXIT, MONDAY, 16, 0)

    outcome = analyze(office)

    assert outcome.classification == DayClassification.INCOMPLETE
    assert outcome.punch_count == 1


def test_zero_punches_is_incomplete(office):
    outcome = analyze(office)

    assert outcome.classification == DayClassification.INCOMPLETE
    assert outcome.punch_count == 0
    assert outcome.net_worked_minutes == 0


def test_irregular_but_complete_day_stays_punctual(office):
    office.punch(7, PunchType.ENTRY, MONDAY, 8, 0)
    office.punch(7, PunchType.ENTRY, MONDAY, 8, 5)
    office.punch(7, PunchType.EXIT, MONDAY, 17, 0)

    outcome = analyze(office)

    assert outcome.classification == DayClassification.PUNCTUAL
    assert outcome.irregularities == 1
    assert "irregular" in outcome.note
    assert outcome.raw_late_minutes == 0


def test_early_departure_is_recorded_independently(office):
    office.day(7, MONDAY, (7, 55), (16, 30))

    outcome = analyze(office)

    assert outcome.classification == DayClassification.PUNCTUAL
    assert outcome.early_departure_minutes == 30


def test_break_only_reduces_net_worked_time(world):
    world.add_schedule(4, entry=time(8, 0), exit=time(17, 0), break_minutes=60)
    world.assign(7, 4, date(2025, 1, 1))
    world.day(7, MONDAY, (8, 0), (18, 0))

    outcome = analyze(world)

    assert outcome.net_worked_minutes == 9 * 60
    assert outcome.overtime_minutes == 60


def test_punches_of_other_days_do_not_leak(office):
    office.day(7, date(2025, 3, 2), (8, 0), (17, 0))
    office.day(7, MONDAY, (8, 0), (17, 0))
    office.day(7, date(2025, 3, 4), (9, 0), (17, 0))

    outcome = analyze(office)

    assert outcome.punch_count == 2
    assert outcome.classification == DayClassification.PUNCTUAL


def test_outcome_serializes_to_plain_json_types(office):
    office.day(7, MONDAY, (8, 25), (17, 40))

    data = analyze(office).to_dict()

    assert data["date"] == "2025-03-03"
    assert data["weekday"] == "Monday"
    assert data["classification"] == "LATE_COMPENSATED"
    assert data["first_entry_local"] == "08:25:00"
    assert data["sessions"][0]["minutes"] == 555


def test_inverted_range_is_rejected(office):
    with pytest.raises(InvalidDateRangeError):
        office.services().attendance_service.iter_day_outcomes(
            employee_id=7, start=date(2025, 3, 5), end=date(2025, 3, 3)
        )
