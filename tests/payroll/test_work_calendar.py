from datetime import date

from src.hr_payroll.hr_payroll.core.enums import DayType
from src.hr_payroll.hr_payroll.payroll.calendar import WorkCalendar
from src.hr_payroll.hr_payroll.payroll.model import Holiday


def test_standard_days_skip_sundays():
    assert WorkCalendar().standard_work_days("2025-03") == 26


def test_standard_days_skip_holidays():
    calendar = WorkCalendar(
        [
            Holiday(date(2024, 4, 30), "Giải phóng miền Nam", is_recurring=True),
            Holiday(date(2025, 4, 14), "Giỗ Tổ Hùng Vương"),
            Holiday(date(2024, 4, 15), "Ngày nghỉ năm trước"),
        ]
    )

    assert calendar.standard_work_days("2025-04") == 24


def test_two_day_weekend():
    assert WorkCalendar(weekend_days=(5, 6)).standard_work_days("2025-03") == 21


def test_day_type_precedence():
    calendar = WorkCalendar([Holiday(date(2025, 3, 2), "Nghỉ bù", is_recurring=False)])

    assert calendar.day_type(date(2025, 3, 2)) is DayType.HOLIDAY
    assert calendar.day_type(date(2025, 3, 9)) is DayType.WEEKEND
    assert calendar.day_type(date(2025, 3, 10)) is DayType.WEEKDAY
