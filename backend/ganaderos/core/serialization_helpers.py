"""
Helpers genéricos de serialización y formato para presentación.
NO contiene lógica de negocio, solo utilidades de formato.
El redondeo se aplica solo aquí, nunca al calcular.
"""
from datetime import date
from decimal import Decimal, ROUND_FLOOR


def round_display(value) -> int:
    """Redondea al entero más cercano; las mitades van hacia +infinito (-2.5 -> -2)"""
    if value is None:
        return 0
    return int((Decimal(str(value)) + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def format_thousands(value: int) -> str:
    """Separador de miles al estilo es-CO: 1234567 -> '1.234.567'"""
    sign = "-" if value < 0 else ""
    return sign + f"{abs(value):,}".replace(",", ".")


def format_currency(value) -> str:
    return f"${format_thousands(round_display(value))}"


def format_kg(value) -> str:
    return f"{round_display(value)} kg"


def format_date(value: date) -> str:
    """Fecha al estilo es-CO: d/m/aaaa"""
    return f"{value.day}/{value.month}/{value.year}"
