from datetime import date, time

import pytest

from src.labor_time.labor_time.absences.model import Absence
from src.labor_time.labor_time.core.enums import AbsenceStatus, DayClassification, PunchType
from src.labor_time.labor_time.core.exceptions import NotFoundError, ValidationError

MONDAY = date(2025, 3, 3)


@pytest.fixture
def staff(world):
    world.add_schedule(1, entry=time(8, 0), exit=time(17, 0), tolerance=5, weekdays=range(1, 6))
    for employee_id, name, site in [(1, "Ana", 10), (2, "Bruno", 10), (3, "Carla", 20), (4, "Diego", 10)]:
        world.add_employee(employee_id, name, site_id=site)
        world.assign(employee_id, 1, date(2025, 1, 1))
    return world


def test_dashboard_metrics(staff):
    staff.day(1, MONDAY, (8, 0), (17, 0))
    staff.day(2, MONDAY, (8, 40), (17, 0))
    staff.punch(3, PunchType.ENTRY, MONDAY, 8, 20)
    # Diego never shows up

    m = staff.services().dashboard_service.metrics(work_date=MONDAY)

    assert m.active_employees == 4
    assert m.present == 3
    assert m.absent == 1
    assert m.late == 2
    assert m.without_exit == 1
    assert m.punch_count == 5
    assert [(x.full_name, x.raw_late_minutes) for x in m.top_latecomers] == [("Bruno", 40), ("Carla", 20)]
    assert m.top_latecomers[0].first_entry == time(8, 40)


def test_dashboard_filters_by_site_and_limits_latecomers(staff):
    staff.day(1, MONDAY, (8, 30), (17, 0))
    staff.day(2, MONDAY, (8, 40), (17, 0))
    staff.day(4, MONDAY, (8, 10), (17, 0))

    m = staff.services(top_latecomers=2).dashboard_service.metrics(work_date=MONDAY, site_id=10)

    assert m.active_employees == 3
    assert m.late == 3
    assert [x.employee_id for x in m.top_latecomers] == [2, 1]
    assert m.to_dict()["top_latecomers"][0]["late_minutes"] == 40


def test_dashboard_without_employees(world):
    m = world.services().dashboard_service.metrics(work_date=MONDAY)

    assert m.active_employees == 0
    assert m.top_latecomers == ()


def test_monthly_summary(staff):
    staff.day(1, date(2025, 3, 3), (8, 20), (17, 30))  # compensated
    staff.day(1, date(2025, 3, 4), (8, 20), (17, 0))  # uncompensated
    staff.day(1, date(2025, 3, 5), (8, 0), (16, 0))  # early departure
    staff.absences.absences.append(
        Absence(
            employee_id=1,
            date_from=date(2025, 3, 6),
            date_to=date(2025, 3, 7),
            status=AbsenceStatus.APPROVED,
            kind="vacation",
            absence_id=1,
        )
    )
    for d in range(10, 32):
        work_date = date(2025, 3, d)
        if work_date.isoweekday() <= 5:
            staff.day(1, work_date, (8, 0), (17, 0))

    s = staff.services().monthly_summary_service.summarize(employee_id=1, year=2025, month=3)

    assert s.period_label == "March 2025"
    assert s.total_absences == 1
    assert s.summary.inferred_absences == ()
    data = s.to_dict()
    assert data["tardiness_count"] == 2
    assert data["compensated_tardiness_count"] == 1
    assert data["uncompensated_late_minutes"] == 20
    assert data["early_departures"] == 1
    assert data["overtime"] == "00:10"
    assert data["summary"]["from"] == "2025-03-01"
    assert data["summary"]["to"] == "2025-03-31"


def test_monthly_summary_counts_an_absence_spanning_a_weekend_once(staff):
    staff.absences.absences.append(
        Absence(
            employee_id=2,
            date_from=date(2025, 3, 7),
            date_to=date(2025, 3, 10),
            status=AbsenceStatus.APPROVED,
            kind="vacation",
            absence_id=5,
        )
    )
    for d in range(1, 32):
        work_date = date(2025, 3, d)
        if work_date.isoweekday() <= 5 and work_date not in (date(2025, 3, 7), date(2025, 3, 10)):
            staff.day(2, work_date, (8, 0), (17, 0))

    s = staff.services().monthly_summary_service.summarize(employee_id=2, year=2025, month=3)

    assert sum(1 for d in s.summary.days if d.classification == DayClassification.ABSENT) == 4
    assert s.summary.inferred_absences == ()
    assert s.total_absences == 1
    assert s.to_dict()["total_absences"] == 1


def test_monthly_summary_counts_inferred_absences(staff):
    s = staff.services().monthly_summary_service.summarize(employee_id=4, year=2025, month=2)

    assert s.total_absences == 20
    assert len(s.summary.inferred_absences) == 20


def test_monthly_summary_unknown_employee(staff):
    with pytest.raises(NotFoundError):
        staff.services().monthly_summary_service.summarize(employee_id=99, year=2025, month=3)


def test_monthly_summary_rejects_bad_month(staff):
    with pytest.raises(ValidationError):
        staff.services().monthly_summary_service.summarize(employee_id=1, year=2025, month=13)
