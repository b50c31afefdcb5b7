from datetime import date
from decimal import Decimal

from ganaderos.core.serialization_helpers import format_currency, format_date, format_kg, round_display


def test_currency_rounds_and_groups_thousands():
    assert format_currency(1234567.5) == '$1.234.568'
    assert format_currency(Decimal('999.49')) == '$999'
    assert format_currency(0) == '$0'
    assert format_currency(-2500) == '$-2.500'


def test_round_halves_go_up():
    assert round_display(2.5) == 3
    assert round_display(-2.5) == -2
    assert round_display(-2.6) == -3
    assert round_display(None) == 0


def test_kg_and_date():
    assert format_kg(450.4) == '450 kg'
    assert format_date(date(2024, 1, 5)) == '5/1/2024'
