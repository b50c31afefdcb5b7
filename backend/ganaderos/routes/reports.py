import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from ganaderos.core.deps import get_current_user, get_record_store
from ganaderos.models.user import User
from ganaderos.services.record_store import RecordStore
from ganaderos.services.sales_report_export import attachment_disposition, build_sales_report_workbook
from ganaderos.services.sales_report_service import FetchFailure, run_sales_report

router = APIRouter()


class SalesReportRowOut(BaseModel):
    date: dt.date
    member: str
    cumulative_inflow: int
    sale_quantity: int
    death_count: int
    theft_count: int
    price_per_kg: float
    total_kg: float
    total: float
    pct_major: float  # 60%
    pct_minor: float  # 40%
    current_inventory: int


class SalesReportOut(BaseModel):
    member: Optional[str]
    rows: List[SalesReportRowOut]
    total_rows: int
    # Ventas sin registro de movimientos en la misma fecha (omitidas)
    dropped_count: int


@router.get("/sales", response_model=SalesReportOut)
def get_sales_report(
    member: Optional[str] = Query(None),
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user),
):
    """
    Tabla de ventas: una fila por socio y fecha de venta, fecha descendente.
    Si se indica `member`, solo las ventas de ese socio.
    """
    try:
        result = run_sales_report(store, member)
    except FetchFailure as e:
        raise HTTPException(status_code=503, detail=e.message)

    return SalesReportOut(
        member=member or None,
        rows=[SalesReportRowOut(**row) for row in result["rows"]],
        total_rows=len(result["rows"]),
        dropped_count=len(result["dropped"]),
    )


@router.get("/sales/export")
def export_sales_report(
    member: Optional[str] = Query(None),
    store: RecordStore = Depends(get_record_store),
    current_user: User = Depends(get_current_user),
):
    """Exporta la tabla de ventas a Excel"""
    try:
        result = run_sales_report(store, member)
    except FetchFailure as e:
        raise HTTPException(status_code=503, detail=e.message)

    output = build_sales_report_workbook(result["rows"])
    filename = f"ventas_{member}.xlsx" if member else "ventas.xlsx"
    return StreamingResponse(
        output,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": attachment_disposition(filename)},
    )
