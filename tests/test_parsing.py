import pytest

from venture_backend.errors import InvalidParameter
from venture_backend.ideas import IDEA_CATALOG, filter_ideas
from venture_backend.parsing import parse_number
from venture_backend.projection import ProjectionInput


@pytest.mark.parametrize("value, expected", [(3, 3.0), (2.5, 2.5), ("12", 12.0), ("-4.5", -4.5)])
def test_parse_number_accepts_numbers_and_numeric_text(value, expected):
    assert parse_number("amount", value) == expected


@pytest.mark.parametrize(
    "value",
    [True, False, "abc", None, [1], float("nan"), float("inf"), "-inf", "nan"],
)
def test_parse_number_rejects_malformed_values(value):
    with pytest.raises(InvalidParameter):
        parse_number("amount", value)


@pytest.mark.parametrize("value", [float("inf"), float("nan"), "inf", True])
def test_idea_bounds_and_projection_reject_the_same_input(value):
    with pytest.raises(InvalidParameter):
        filter_ideas(IDEA_CATALOG, max_investment=value)
    with pytest.raises(InvalidParameter):
        ProjectionInput.from_payload(
            {"initialInvestment": value, "monthlyRevenue": 1, "monthlyExpenses": 1, "months": 1}
        )
