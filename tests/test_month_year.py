from __future__ import annotations

from datetime import date

import pytest

from app.core.exceptions import ValidationError
from app.services.subscription_service import parse_month_year


def test_parses_to_first_of_month():
    parsed = parse_month_year("07-2025", "start_date")
    assert parsed == date(2025, 7, 1)
    assert (parsed.year, parsed.month, parsed.day) == (2025, 7, 1)


def test_accepts_boundary_months():
    assert parse_month_year("01-1999", "from") == date(1999, 1, 1)
    assert parse_month_year("12-2030", "to") == date(2030, 12, 1)


@pytest.mark.parametrize(
    "value",
    ["13-2025", "00-2025", "7-2025", "07-25", "07/2025", "ab-2025", "07-2025 ", "", "2025-07", "07-2025\n", "٠٧-٢٠٢٥"],
)
def test_rejects_malformed_text(value):
    with pytest.raises(ValidationError):
        parse_month_year(value, "start_date")


def test_error_names_the_field():
    with pytest.raises(ValidationError) as excinfo:
        parse_month_year("13-2025", "end_date")
    assert "end_date" in str(excinfo.value)
