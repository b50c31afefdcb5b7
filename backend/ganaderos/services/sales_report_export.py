"""
Exportación del reporte de ventas a Excel con los valores ya formateados.
"""
from io import BytesIO
from typing import Iterable
from urllib.parse import quote

import pandas as pd

from ganaderos.core.serialization_helpers import format_currency, format_date, format_kg
from ganaderos.services.sales_report_service import SalesReportRow


SHEET_NAME = "Ventas"

COLUMNS = [
    "Fecha Venta",
    "Inventario",
    "Salidas Venta",
    "Salidas Muerte",
    "Salidas Robo",
    "Vr/Kilo Venta",
    "Total Kilos",
    "Total Venta",
    "60%",
    "40%",
    "Inventario Actual",
    "Socio",
]


def sales_report_frame(rows: Iterable[SalesReportRow]) -> pd.DataFrame:
    data = [
        {
            "Fecha Venta": format_date(row["date"]),
            "Inventario": row["cumulative_inflow"],
            "Salidas Venta": row["sale_quantity"],
            "Salidas Muerte": row["death_count"],
            "Salidas Robo": row["theft_count"],
            "Vr/Kilo Venta": format_currency(row["price_per_kg"]),
            "Total Kilos": format_kg(row["total_kg"]),
            "Total Venta": format_currency(row["total"]),
            "60%": format_currency(row["pct_major"]),
            "40%": format_currency(row["pct_minor"]),
            "Inventario Actual": row["current_inventory"],
            "Socio": row["member"],
        }
        for row in rows
    ]
    return pd.DataFrame(data, columns=COLUMNS)


def build_sales_report_workbook(rows: Iterable[SalesReportRow]) -> BytesIO:
    df = sales_report_frame(rows)

    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)

        worksheet = writer.sheets[SHEET_NAME]
        # Ajustar ancho de columnas, máximo 50
        for column in worksheet.columns:
            max_length = max(len(str(cell.value)) for cell in column if cell.value is not None)
            worksheet.column_dimensions[column[0].column_letter].width = min(max_length + 2, 50)

    output.seek(0)
    return output


def attachment_disposition(filename: str) -> str:
    """
    Content-Disposition con nombre entre comillas y versión UTF-8 (RFC 5987)
    para nombres de socio con espacios o acentos.
    """
    fallback = "".join(c if c.isascii() and c not in '"\\' else "_" for c in filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"
