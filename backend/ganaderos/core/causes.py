"""
Causas de salida de animales del inventario (tipo cerrado).
"""
from enum import Enum


class ExitCause(str, Enum):
    sale = "sale"
    death = "death"
    theft = "theft"


# Notas por defecto para entradas de venta
DEFAULT_SALE_NOTES = "venta"
