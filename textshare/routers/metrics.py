# textshare/routers/metrics.py
# Prometheus exposition endpoint

from fastapi import APIRouter, Response

from textshare.observability.metrics import render_latest

router = APIRouter(tags=["Metrics"])


@router.get("/metrics", include_in_schema=False)
async def prometheus_metrics() -> Response:
    """// expose /metrics"""
    payload, content_type = render_latest()
    return Response(content=payload, media_type=content_type)
