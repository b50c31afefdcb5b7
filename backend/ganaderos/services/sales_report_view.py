"""
Estado local de una vista del reporte de ventas: carga, error, filas y
filtro de socio. Cada ejecución recibe un token; un resultado que llega
después de que empezó una ejecución más nueva se descarta.
"""
import logging
from typing import List, Optional

from ganaderos.services.record_store import RecordStore
from ganaderos.services.sales_report_service import (
    FetchFailure,
    SalesReportResult,
    SalesReportRow,
    run_sales_report,
)


logger = logging.getLogger(__name__)


class SalesReportView:
    def __init__(self, member_filter: Optional[str] = None):
        self.member_filter = member_filter or None
        self.rows: List[SalesReportRow] = []
        self.dropped_count = 0
        self.loading = False
        self.error: Optional[str] = None
        self._generation = 0

    def begin(self) -> int:
        self._generation += 1
        self.loading = True
        self.error = None
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def apply(self, token: int, result: SalesReportResult) -> bool:
        if not self.is_current(token):
            logger.debug("discarding stale sales report result token=%s latest=%s", token, self._generation)
            return False
        self.rows = result["rows"]
        self.dropped_count = len(result["dropped"])
        self.loading = False
        return True

    def fail(self, token: int, message: str) -> bool:
        if not self.is_current(token):
            return False
        self.rows = []
        self.dropped_count = 0
        self.error = message
        self.loading = False
        return True

    def load(self, store: RecordStore) -> bool:
        """Runs the whole pipeline; returns False if the result came in stale."""
        token = self.begin()
        try:
            result = run_sales_report(store, self.member_filter)
        except FetchFailure as exc:
            return self.fail(token, exc.message)
        return self.apply(token, result)

    def retry(self, store: RecordStore) -> bool:
        return self.load(store)

    def set_member_filter(self, member: Optional[str], store: RecordStore) -> bool:
        self.member_filter = member or None
        return self.load(store)

    @property
    def is_empty(self) -> bool:
        return not self.loading and self.error is None and not self.rows
