"""JSON views for the FIR dashboard pages.

Views are thin adapters: they read the Record Store snapshot, delegate to the
pure `analysis` package or `core.search`, and serialize DTOs. Load failures
surface as `warnings` in the payload, never as server errors.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from analysis.aggregations import filter_records, summarize, unique_keywords, unique_stations
from analysis.engine import analyze_records
from analysis.severity import map_center, map_points
from core.records import get_snapshot
from core.search import build_search_items, case_detail, find_case


def _parse_date_param(request: HttpRequest, name: str, warnings: list[str]) -> date | None:
    """Parse an optional ISO date query parameter, recording a warning when invalid."""

    raw = (request.GET.get(name) or "").strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        warnings.append(f"Ignoring invalid {name} date: {raw!r}.")
        return None


def _parse_limit_param(request: HttpRequest, warnings: list[str]) -> int | None:
    """Parse the optional positive `limit` query parameter."""

    raw = (request.GET.get("limit") or "").strip()
    if not raw:
        return None
    if not raw.isdecimal() or int(raw) <= 0:
        warnings.append(f"Ignoring invalid limit: {raw!r}.")
        return None
    return int(raw)


def _param_enabled(request: HttpRequest, name: str) -> bool:
    return (request.GET.get(name) or "").strip().lower() in {"1", "true", "t", "yes", "y", "on"}


@require_GET
def dashboard(request: HttpRequest) -> JsonResponse:
    """Return summary stats and map data for the (optionally filtered) collection."""

    snapshot = get_snapshot()
    warnings = list(snapshot.warnings)

    start_date = _parse_date_param(request, "start", warnings)
    end_date = _parse_date_param(request, "end", warnings)
    start = datetime.combine(start_date, time.min, tzinfo=timezone.utc) if start_date else None
    end = datetime.combine(end_date, time.max, tzinfo=timezone.utc) if end_date else None

    records = filter_records(
        snapshot.records,
        station=(request.GET.get("station") or "").strip() or None,
        keyword=(request.GET.get("keyword") or "").strip() or None,
        start=start,
        end=end,
    )
    points = map_points(records)
    center_lat, center_lng = map_center(points)

    return JsonResponse(
        {
            "stats": summarize(snapshot.records).as_json(),
            "filteredCount": len(records),
            "map": {
                "center": {"lat": center_lat, "lng": center_lng},
                "heatmap": _param_enabled(request, "heatmap"),
                "points": [point.as_json() for point in points],
            },
            "policeStations": unique_stations(snapshot.records),
            "keywords": unique_keywords(snapshot.records),
            "warnings": warnings,
        }
    )


@require_GET
def analytics(request: HttpRequest) -> JsonResponse:
    """Return every strategic-analytics aggregate."""

    snapshot = get_snapshot()
    result = analyze_records(snapshot.records, reference_year=settings.FIR_REFERENCE_YEAR)
    payload = result.as_json()
    payload["warnings"] = list(snapshot.warnings)
    return JsonResponse(payload)


@require_GET
def search(request: HttpRequest) -> JsonResponse:
    """Return cases matching the `q` query parameter, ordered by FIR number."""

    snapshot = get_snapshot()
    warnings = list(snapshot.warnings)
    query = (request.GET.get("q") or "").strip()
    limit = _parse_limit_param(request, warnings)
    results = build_search_items(snapshot.records, query=query, limit=limit)
    return JsonResponse(
        {
            "query": query,
            "count": len(results),
            "results": [item.as_json() for item in results],
            "warnings": warnings,
        }
    )


@require_GET
def case_detail_view(request: HttpRequest, fir_number: str) -> JsonResponse:
    """Return the case-detail payload for an FIR number."""

    snapshot = get_snapshot()
    record = find_case(snapshot.records, fir_number)
    if record is None:
        return JsonResponse(
            {"error": "Case not found.", "firNumber": fir_number, "warnings": list(snapshot.warnings)},
            status=404,
        )
    detail = case_detail(record, reference_year=settings.FIR_REFERENCE_YEAR)
    payload = detail.as_json()
    payload["warnings"] = list(snapshot.warnings)
    return JsonResponse(payload)
