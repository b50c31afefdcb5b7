from decimal import Decimal

import pytest

from ganaderos.core.causes import ExitCause
from ganaderos.services.exit_detail_service import validate_exit_attribution


def test_sale_defaults_notes_and_keeps_terms():
    entries = validate_exit_attribution(10, [
        {'cause': 'sale', 'quantity': 10, 'price_per_kg': 8500, 'total_kg': 4200.5},
    ])

    assert entries == [{
        'cause': 'sale',
        'quantity': 10,
        'notes': 'venta',
        'price_per_kg': Decimal('8500'),
        'total_kg': Decimal('4200.5'),
    }]


def test_quantities_must_add_up_to_exits():
    with pytest.raises(ValueError) as excinfo:
        validate_exit_attribution(10, [
            {'cause': ExitCause.sale, 'quantity': 6, 'price_per_kg': 1, 'total_kg': 1},
            {'cause': ExitCause.death, 'quantity': 3},
        ])

    assert str(excinfo.value) == 'La cantidad asignada (9) debe ser igual al total de salidas (10)'


def test_mixed_causes():
    entries = validate_exit_attribution(6, [
        {'cause': 'sale', 'quantity': 3, 'price_per_kg': 2, 'total_kg': 900},
        {'cause': 'death', 'quantity': 2, 'notes': 'enfermedad'},
        {'cause': 'theft', 'quantity': 1},
    ])

    assert [(e['cause'], e['quantity']) for e in entries] == [('sale', 3), ('death', 2), ('theft', 1)]
    assert entries[1]['notes'] == 'enfermedad'
    assert entries[1]['price_per_kg'] is None


def test_zero_exits_store_a_zero_sale():
    entries = validate_exit_attribution(0, [])

    assert len(entries) == 1
    assert entries[0]['cause'] == 'sale'
    assert entries[0]['quantity'] == 0
    assert entries[0]['notes'] == 'venta'


def test_sale_needs_price_and_kilos():
    with pytest.raises(ValueError, match='obligatorios para ventas'):
        validate_exit_attribution(4, [{'cause': 'sale', 'quantity': 4, 'price_per_kg': 0, 'total_kg': 100}])


@pytest.mark.parametrize('entries, message', [
    ([{'cause': 'gift', 'quantity': 1}], 'inválida'),
    ([{'cause': 'death', 'quantity': 1}, {'cause': 'death', 'quantity': 1}], 'repetida'),
    ([{'cause': 'death', 'quantity': -1}], 'negativa'),
])
def test_invalid_entries(entries, message):
    with pytest.raises(ValueError, match=message):
        validate_exit_attribution(2, entries)
