"""HTTP status helpers: series classification and the undefined sentinel."""
from __future__ import annotations

from http import HTTPStatus
from typing import Any

from route_timer.domain.value_objects.enums import StatusSeries

UNDEFINED_HTTP_STATUS = 999

_SERIES_BY_DIGIT = {
    1: StatusSeries.INFORMATIONAL,
    2: StatusSeries.SUCCESSFUL,
    3: StatusSeries.REDIRECTION,
    4: StatusSeries.CLIENT_ERROR,
    5: StatusSeries.SERVER_ERROR,
}


def status_series(status: int) -> StatusSeries | None:
    """Return the series of a registered HTTP status, or ``None``."""
    try:
        code = HTTPStatus(status)
    except ValueError:
        return None
    return _SERIES_BY_DIGIT.get(code.value // 100)


def read_status(response: Any) -> int:
    """Read ``response.status_code``, falling back to the undefined sentinel."""
    try:
        return int(response.status_code)
    except Exception:  # noqa: BLE001
        return UNDEFINED_HTTP_STATUS
