from __future__ import annotations

import time
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Request, UploadFile

from product_search import catalog as catalog_module
from product_search import logging_utils as logging_utils_module
from product_search import metrics as metrics_module
from product_search import search as search_module
from product_search.config import SearchConfig
from product_search.models import SearchResponse


app = FastAPI(title="image-product-search", version="0.1.0")
config = SearchConfig.from_env()


def _session_request_ids(request: Request) -> tuple[str | None, str | None]:
    """Read x-session-id and x-request-id from headers; default None."""
    session_id = request.headers.get("x-session-id") or None
    request_id = request.headers.get("x-request-id") or None
    return session_id, request_id


def _is_authenticated(request: Request) -> bool:
    """Bearer token must be one of SEARCH_API_TOKENS; no tokens configured means nobody is."""
    header = request.headers.get("authorization") or ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return False
    return token.strip() in config.api_tokens


@app.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/metrics")
def metrics() -> dict:
    """Lightweight JSON metrics (in-memory since process start)."""
    return metrics_module.get_metrics()


@app.post("/search/image", response_model=SearchResponse)
def search_image(
    request: Request,
    image: Optional[UploadFile] = File(default=None),
) -> SearchResponse:
    """Products matching the uploaded image; always 200 with 0-6 products once authenticated."""
    route = "/search/image"
    if not _is_authenticated(request):
        raise HTTPException(status_code=401, detail="Unauthorized")

    session_id, request_id = _session_request_ids(request)
    t0 = time.perf_counter()

    if image is None or not image.filename:
        latency_ms = (time.perf_counter() - t0) * 1000
        metrics_module.record_request(latency_ms=latency_ms, empty_input=True)
        logging_utils_module.log_request(
            route=route,
            latency_ms=latency_ms,
            session_id=session_id,
            request_id=request_id,
        )
        return SearchResponse(products=[])

    try:
        data = image.file.read()
        catalog = catalog_module.get_catalog(config)
        outcome = search_module.search_by_image(data, catalog, config)
        latency_ms = (time.perf_counter() - t0) * 1000
        metrics_module.record_request(
            latency_ms=latency_ms,
            keyword_source=outcome.keyword_source,
            fallback_used=outcome.fallback_used,
        )
        logging_utils_module.log_request(
            route=route,
            latency_ms=latency_ms,
            session_id=session_id,
            request_id=request_id,
            keyword_source=outcome.keyword_source,
            result_count=len(outcome.response.products),
            fallback_used=outcome.fallback_used,
        )
        return outcome.response
    except Exception as e:
        latency_ms = (time.perf_counter() - t0) * 1000
        metrics_module.record_request(latency_ms=latency_ms, error=True)
        logging_utils_module.log_request(
            route=route,
            latency_ms=latency_ms,
            session_id=session_id,
            request_id=request_id,
            error=True,
        )
        logging_utils_module.log_event("search_failed", reason=str(e))
        return SearchResponse(products=[])


def main() -> None:
    import uvicorn

    uvicorn.run("product_search.main:app", host="0.0.0.0", port=8040, reload=True)


if __name__ == "__main__":
    main()
