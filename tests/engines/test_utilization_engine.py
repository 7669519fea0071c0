"""Tests for the resource utilization engine."""

from decimal import Decimal

from flowsync_engines.utilization import (
    booking_revenue,
    calculate_assignment_conflict,
    calculate_employee_utilization,
    calculate_utilization,
    capacity_totals,
    sum_leave_hours,
)
from flowsync_modules.resourcing.models import Assignment, Employee


def _employee(emp_id="e9", rate="100", capacity="40"):
    return Employee(id=emp_id, name="Test", hourly_rate=Decimal(rate), capacity=Decimal(capacity))


class TestEmployeeUtilization:

    def test_half_booked_employee_is_fifty_percent(self, projects):
        emp = _employee()
        booking = Assignment(id="x", employee_id="e9", project_id="p1", hours_per_week=Decimal("20"))

        result = calculate_employee_utilization(emp, [booking], [], projects)

        assert result.allocated_hours == Decimal("20")
        assert result.leave_hours == Decimal("0")
        assert result.utilization == Decimal("50")
        assert not result.is_overallocated

    def test_leave_counted_once_by_default(self, employees, assignments, leaves, projects):
        e2 = employees[1]

        result = calculate_employee_utilization(e2, assignments, leaves, projects)

        assert result.allocated_hours == Decimal("35")
        assert result.leave_hours == Decimal("8")
        assert result.total_load == Decimal("43")
        assert result.utilization == Decimal("107.5")
        assert result.is_overallocated

    def test_leave_multiplier_scales_leave(self, employees, assignments, leaves, projects):
        result = calculate_employee_utilization(
            employees[1], assignments, leaves, projects, leave_multiplier=Decimal("5"),
        )
        assert result.leave_hours == Decimal("40")

    def test_weekly_revenue_uses_recovery_rate(self, employees, assignments, projects):
        result = calculate_employee_utilization(employees[0], assignments, [], projects)

        # 20h x 250 x 0.95 + 15h x 250 x 1.0
        assert result.weekly_revenue == Decimal("4750") + Decimal("3750")

    def test_missing_project_contributes_zero_revenue(self, projects):
        emp = _employee()
        booking = Assignment(id="x", employee_id="e9", project_id="nope", hours_per_week=Decimal("10"))

        result = calculate_employee_utilization(emp, [booking], [], projects)

        assert result.allocated_hours == Decimal("10")
        assert result.weekly_revenue == Decimal("0")

    def test_zero_capacity_yields_zero_utilization(self, projects):
        emp = _employee(capacity="0")
        booking = Assignment(id="x", employee_id="e9", project_id="p1", hours_per_week=Decimal("10"))

        result = calculate_employee_utilization(emp, [booking], [], projects)

        assert result.utilization == Decimal("0")

    def test_utilization_is_not_clamped(self, projects):
        emp = _employee()
        booking = Assignment(id="x", employee_id="e9", project_id="p1", hours_per_week=Decimal("60"))

        result = calculate_employee_utilization(emp, [booking], [], projects)

        assert result.utilization == Decimal("150")


class TestCalculateUtilization:

    def test_one_row_per_employee_in_order(self, employees, assignments, leaves, projects):
        results = calculate_utilization(employees, assignments, leaves, projects)

        assert [r.employee_id for r in results] == ["e1", "e2", "e3"]
        assert results[2].utilization == Decimal("0")

    def test_logs_overallocation(self, employees, assignments, leaves, projects, captured_logs):
        calculate_utilization(employees, assignments, leaves, projects)

        logs = captured_logs()
        warning = next(r for r in logs if r["message"] == "utilization_overallocation_detected")
        assert warning["employee_ids"] == ["e2"]
        completed = next(r for r in logs if r["message"] == "utilization_calculation_completed")
        assert completed["overallocated_count"] == 1
        assert "duration_ms" in completed


class TestAssignmentConflict:

    def test_leave_counted_per_working_day(self, assignments, leaves, employees, projects):
        conflict = calculate_assignment_conflict(
            employee_id="e2",
            proposed_hours=Decimal("5"),
            assignments=assignments,
            leaves=leaves,
            standard_week_hours=Decimal("40"),
        )

        assert conflict.committed_hours == Decimal("35") + Decimal("40")
        assert conflict.total_hours == Decimal("80")
        assert conflict.is_overallocated

    def test_edited_assignment_is_excluded(self, assignments):
        conflict = calculate_assignment_conflict(
            employee_id="e1",
            proposed_hours=Decimal("25"),
            assignments=assignments,
            leaves=[],
            standard_week_hours=Decimal("40"),
            exclude_assignment_id="a1",
        )

        assert [a.id for a in conflict.existing_assignments] == ["a3"]
        assert conflict.total_hours == Decimal("40")
        assert not conflict.is_overallocated

    def test_projected_revenue(self, assignments, employees, projects):
        conflict = calculate_assignment_conflict(
            employee_id="e3",
            proposed_hours=Decimal("10"),
            assignments=assignments,
            leaves=[],
            standard_week_hours=Decimal("40"),
            employee=employees[2],
            project=projects[0],
        )

        assert conflict.projected_weekly_revenue == Decimal("3800")

    def test_projected_revenue_without_lookups_is_zero(self):
        conflict = calculate_assignment_conflict(
            employee_id="ghost",
            proposed_hours=Decimal("10"),
            assignments=[],
            leaves=[],
            standard_week_hours=Decimal("40"),
        )
        assert conflict.projected_weekly_revenue == Decimal("0")


class TestHelpers:

    def test_sum_leave_hours(self, leaves):
        assert sum_leave_hours(leaves, Decimal("1")) == Decimal("8")
        assert sum_leave_hours([], Decimal("5")) == Decimal("0")

    def test_booking_revenue_missing_employee(self, projects):
        assert booking_revenue(Decimal("10"), None, projects[0]) == Decimal("0")

    def test_capacity_totals(self, employees, assignments):
        allocated, capacity = capacity_totals(employees, assignments)
        assert allocated == Decimal("70")
        assert capacity == Decimal("120")
