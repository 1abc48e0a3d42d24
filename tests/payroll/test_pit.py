import pytest

from src.hr_payroll.hr_payroll.payroll.model import TaxBracket
from src.hr_payroll.hr_payroll.payroll.tax import calculate_pit, round_vnd


@pytest.mark.parametrize(
    "taxable,expected",
    [
        (0, 0),
        (-1_000_000, 0),
        (5_000_000, 250_000),
        (10_000_000, 750_000),
        (12_270_000, 1_090_500),
        (20_000_000, 2_350_000),
        (100_000_000, 25_150_000),
    ],
)
def test_progressive_pit(taxable, expected):
    assert calculate_pit(taxable) == pytest.approx(expected)


def test_pit_is_monotonic():
    incomes = [i * 1_500_000 for i in range(0, 80)]
    taxes = [calculate_pit(i) for i in incomes]

    assert taxes == sorted(taxes)


def test_income_above_last_bounded_bracket_uses_last_rate():
    brackets = (TaxBracket(up_to=5_000_000, rate=0.05), TaxBracket(up_to=10_000_000, rate=0.10))

    assert calculate_pit(12_000_000, brackets) == pytest.approx(950_000)


def test_round_vnd_is_half_up():
    assert round_vnd(2.5) == 3
    assert round_vnd(1234.4) == 1234
    assert round_vnd(0) == 0
