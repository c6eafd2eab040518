from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from fastapi import HTTPException, Query

from .core.datemath import SimpleDate


# PUBLIC_INTERFACE
def pagination_envelope(items: Iterable[Any], total: int, limit: int, offset: int) -> Dict[str, Any]:
    """
    Build a standard pagination envelope for list endpoints.

    Returns:
        Dict with keys: items, total, limit, offset.
    """
    return {
        "items": list(items),
        "total": int(total),
        "limit": int(max(limit, 0)),
        "offset": int(max(offset, 0)),
    }


# PUBLIC_INTERFACE
def today_param(
    today: Optional[str] = Query(
        None,
        description="Treat this ISO date (YYYY-MM-DD) as today; defaults to the server date",
        pattern=r"^\d{4}-\d{2}-\d{2}$",
    ),
) -> SimpleDate:
    """
    Dependency resolving the 'today' used by relative-date computations.
    Day and month ranges are checked loosely; the date math has no leap years.
    """
    if today is None:
        return SimpleDate.today()
    year, month, day = (int(p) for p in today.split("-"))
    if not (1 <= month <= 12 and 1 <= day <= 31):
        raise HTTPException(status_code=400, detail="today must be a valid YYYY-MM-DD date")
    return SimpleDate(day=day, month=month, year=year)
