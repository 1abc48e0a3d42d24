from datetime import date, datetime

from src.hr_payroll.hr_payroll.attendance.aggregator import classify_status
from src.hr_payroll.hr_payroll.attendance.factory import AttendanceStrategyFactory, shift_window
from src.hr_payroll.hr_payroll.attendance.model import AttendanceRecord
from src.hr_payroll.hr_payroll.attendance.strategies.late_strategy import LateStrategy
from src.hr_payroll.hr_payroll.attendance.strategies.normal_strategy import NormalStrategy
from src.hr_payroll.hr_payroll.attendance.strategies.pending_strategy import PendingStrategy
from src.hr_payroll.hr_payroll.core.enums import AttendanceStatus
from src.hr_payroll.hr_payroll.shifts.model import ShiftTime

DAY = ShiftTime("08:00", "17:00", name="Hành chính", id="1")
NIGHT = ShiftTime("22:00", "06:00", name="Ca đêm", id="2")


def _record(check_in, check_out, day=date(2025, 1, 1)):
    return AttendanceRecord(employee_id="e1", work_date=day, check_in=check_in, check_out=check_out)


def test_factory_checkin_on_time_within_grace():
    window = shift_window(date(2025, 1, 1), DAY)

    strategy = AttendanceStrategyFactory().for_record(
        check_in=datetime(2025, 1, 1, 8, 5, 0),
        check_out=datetime(2025, 1, 1, 17, 0),
        window=window,
        grace_minutes=5,
    )

    assert isinstance(strategy, NormalStrategy)


def test_factory_checkin_late_after_grace():
    window = shift_window(date(2025, 1, 1), DAY)
    check_in = datetime(2025, 1, 1, 8, 6, 0)

    strategy = AttendanceStrategyFactory().for_record(
        check_in=check_in, check_out=datetime(2025, 1, 1, 17, 0), window=window, grace_minutes=5
    )

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide(check_in=check_in, check_out=None, window=window).minutes_off == 6


def test_factory_without_checkout_is_pending():
    strategy = AttendanceStrategyFactory().for_record(
        check_in=datetime(2025, 1, 1, 8, 0), check_out=None, window=None, grace_minutes=0
    )

    assert isinstance(strategy, PendingStrategy)


def test_classify_on_boundary_is_on_time():
    record = _record(datetime(2025, 1, 1, 8, 0), datetime(2025, 1, 1, 17, 0))

    assert classify_status(record, DAY) == AttendanceStatus.ON_TIME


def test_classify_one_second_late():
    record = _record(datetime(2025, 1, 1, 8, 0, 1), datetime(2025, 1, 1, 17, 0))

    assert classify_status(record, DAY) == AttendanceStatus.LATE


def test_classify_early_leave():
    record = _record(datetime(2025, 1, 1, 7, 55), datetime(2025, 1, 1, 16, 30))

    assert classify_status(record, DAY) == AttendanceStatus.EARLY_LEAVE


def test_classify_late_wins_over_early_leave():
    record = _record(datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 16, 0))

    assert classify_status(record, DAY, grace_minutes=15) == AttendanceStatus.LATE


def test_classify_without_checkout_is_pending():
    assert classify_status(_record(datetime(2025, 1, 1, 8, 0), None), DAY) == AttendanceStatus.PENDING


def test_classify_without_scheduled_shift_is_on_time():
    record = _record(datetime(2025, 1, 1, 10, 0), datetime(2025, 1, 1, 12, 0))

    assert classify_status(record, None) == AttendanceStatus.ON_TIME


def test_classify_overnight_shift_checks_out_next_morning():
    on_time = _record(datetime(2025, 1, 1, 22, 0), datetime(2025, 1, 2, 6, 0))
    early = _record(datetime(2025, 1, 1, 22, 0), datetime(2025, 1, 2, 5, 0))

    assert classify_status(on_time, NIGHT) == AttendanceStatus.ON_TIME
    assert classify_status(early, NIGHT) == AttendanceStatus.EARLY_LEAVE
