"""
Servicio del reporte de ventas.

Agrupa las salidas por venta por (socio, fecha), las cruza con el registro
de movimientos de esa misma fecha y calcula inventario acumulado, salidas
acumuladas y el reparto 60/40 del total de la venta.

Las funciones de agregación y conciliación son puras; solo
`run_sales_report` toca el RecordStore.
"""
import logging
from collections import defaultdict
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple, TypedDict

from sqlalchemy.exc import SQLAlchemyError

from ganaderos.core.causes import ExitCause
from ganaderos.services.record_store import RecordStore


logger = logging.getLogger(__name__)

MAJOR_SHARE = 0.6
MINOR_SHARE = 0.4

FETCH_FAILURE_MESSAGE = "Error al cargar los datos de ventas"

SaleKey = Tuple[str, date]


class FetchFailure(Exception):
    """One of the report's read queries failed; the whole run is aborted."""

    def __init__(self, message: str = FETCH_FAILURE_MESSAGE):
        super().__init__(message)
        self.message = message


class SaleAggregate(TypedDict):
    """Total sold head count for one (member, date)."""
    member: str
    date: date
    total_sale_quantity: int


class SalesReportRow(TypedDict):
    """One reconciled line of the sales report."""
    date: date
    member: str
    cumulative_inflow: int
    sale_quantity: int
    death_count: int
    theft_count: int
    price_per_kg: float
    total_kg: float
    total: float
    pct_major: float
    pct_minor: float
    current_inventory: int


class SalesReportResult(TypedDict):
    rows: List[SalesReportRow]
    # Aggregates without a movement record on their exact date
    dropped: List[SaleKey]


def aggregate_sale_exits(details: Iterable[Any]) -> Dict[SaleKey, SaleAggregate]:
    """
    Agrupa las salidas con causa venta por (socio, fecha) y suma cantidades.

    Args:
        details: Detalles de salida de cualquier causa; las que no son venta se ignoran.

    Returns:
        Mapa (socio, fecha) -> SaleAggregate
    """
    aggregates: Dict[SaleKey, SaleAggregate] = {}
    for detail in details:
        if detail.cause != ExitCause.sale:
            continue
        key = (detail.member, detail.date)
        if key not in aggregates:
            aggregates[key] = SaleAggregate(member=detail.member, date=detail.date, total_sale_quantity=0)
        aggregates[key]["total_sale_quantity"] += detail.quantity or 0
    return aggregates


def _count_by_cause(details: Iterable[Any]) -> Dict[SaleKey, Dict[str, int]]:
    known = {cause.value for cause in ExitCause}
    counts: Dict[SaleKey, Dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for detail in details:
        cause = getattr(detail.cause, "value", detail.cause)
        if cause not in known:
            logger.warning("ignoring exit detail with unknown cause %r (%s@%s)", cause, detail.member, detail.date)
            continue
        counts[(detail.member, detail.date)][cause] += detail.quantity or 0
    return counts


def reconcile_sales(
    aggregates: Dict[SaleKey, SaleAggregate],
    records: Iterable[Any],
    details: Iterable[Any] = (),
    member_filter: Optional[str] = None,
) -> SalesReportResult:
    """
    Construye una fila de reporte por cada agregado de venta.

    Los agregados sin registro de movimientos en la fecha exacta se omiten
    del reporte y se devuelven en `dropped`.
    """
    records_by_member: Dict[str, List[Any]] = defaultdict(list)
    for record in records:
        records_by_member[record.member].append(record)
    cause_counts = _count_by_cause(details)

    rows: List[SalesReportRow] = []
    dropped: List[SaleKey] = []
    for key, aggregate in aggregates.items():
        member, sale_date = key
        if member_filter and member != member_filter:
            continue

        history = [r for r in records_by_member.get(member, []) if r.date <= sale_date]
        cumulative_inflow = sum(r.entries or 0 for r in history)
        cumulative_outflow = sum(r.exits or 0 for r in history)

        matching = next((r for r in history if r.date == sale_date), None)
        if matching is None:
            dropped.append(key)
            continue

        total = float(matching.total or 0)
        counts = cause_counts.get(key, {})
        rows.append(SalesReportRow(
            date=sale_date,
            member=member,
            cumulative_inflow=cumulative_inflow,
            sale_quantity=aggregate["total_sale_quantity"],
            death_count=counts.get(ExitCause.death.value, 0),
            theft_count=counts.get(ExitCause.theft.value, 0),
            price_per_kg=float(matching.price_per_kg or 0),
            total_kg=float(matching.total_kg or 0),
            total=total,
            pct_major=total * MAJOR_SHARE,
            pct_minor=total * MINOR_SHARE,
            current_inventory=cumulative_inflow - cumulative_outflow,
        ))

    # Fecha descendente; los empates quedan en el orden de agrupación
    rows.sort(key=lambda row: row["date"], reverse=True)
    return SalesReportResult(rows=rows, dropped=dropped)


def fetch_report_inputs(store: RecordStore) -> Tuple[List[Any], List[Any]]:
    """Runs both reads; either one failing aborts the whole report."""
    try:
        records = list(store.list_movement_records())
        details = list(store.list_exit_details(cause=None))
    except (SQLAlchemyError, OSError) as exc:
        logger.exception("sales report fetch failed")
        raise FetchFailure() from exc
    return records, details


def run_sales_report(store: RecordStore, member_filter: Optional[str] = None) -> SalesReportResult:
    records, details = fetch_report_inputs(store)
    result = reconcile_sales(aggregate_sale_exits(details), records, details, member_filter)
    if result["dropped"]:
        logger.warning(
            "sales report dropped %s aggregate(s) with no movement record on the same date: %s",
            len(result["dropped"]),
            ", ".join(f"{member}@{day}" for member, day in result["dropped"]),
        )
    logger.info("sales report member=%s rows=%s", member_filter or "*", len(result["rows"]))
    return result


def build_sales_report(store: RecordStore, member_filter: Optional[str] = None) -> List[SalesReportRow]:
    """Report rows for every member, or only `member_filter` when given."""
    return run_sales_report(store, member_filter)["rows"]
