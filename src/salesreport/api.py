"""FastAPI application exposing seller performance reports."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .analyzer import analyze_sales_data
from .config import AnalyzerConfig, get_config
from .exceptions import AnalysisError
from .models import ReportEntry
from .strategies import AnalyzerOptions

logger = logging.getLogger(__name__)


class SellerReportResponse(BaseModel):
    """Response payload for the seller report endpoint."""

    report: List[ReportEntry]


def get_analyzer_options(
    config: AnalyzerConfig = Depends(get_config),
) -> AnalyzerOptions:
    """Get default analyzer options (per-request)."""
    return AnalyzerOptions.from_config(config)


async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    """Map analysis errors to stable API error payload."""
    logger.info("analysis rejected: code=%s path=%s", exc.code, request.url.path)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def health_check() -> Dict[str, Any]:
    """Health check endpoint for container orchestration."""
    return {
        "status": "healthy",
        "service": "salesreport",
        "version": __version__,
    }


async def seller_report(
    payload: Dict[str, Any] = Body(
        ..., description="Dataset with sellers, products, customers, purchase_records"
    ),
    limit: Optional[int] = Query(
        None, ge=1, le=1000, description="Top products listed per seller"
    ),
    options: AnalyzerOptions = Depends(get_analyzer_options),
) -> SellerReportResponse:
    """Rank sellers by profit and compute their bonuses."""
    if limit is not None:
        options.top_products_limit = limit
    entries = await run_in_threadpool(analyze_sales_data, payload, options)
    return SellerReportResponse(report=entries)


def create_app() -> FastAPI:
    """Build the API application."""
    application = FastAPI(
        title="Seller Report Service",
        description="Seller revenue, profit and bonus reports from sales records",
        version=__version__,
    )
    application.add_api_route("/health", health_check, methods=["GET"])
    application.add_api_route(
        "/api/v1/reports/sellers",
        seller_report,
        methods=["POST"],
        response_model=SellerReportResponse,
        status_code=status.HTTP_200_OK,
        responses={
            404: {"description": "Purchase record references unknown seller or SKU"},
            422: {"description": "Invalid dataset or options"},
        },
    )
    application.add_exception_handler(AnalysisError, analysis_error_handler)
    return application


app = create_app()


def main(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run API server; host and port default to configuration."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "salesreport.api:app",
        host=host or config.api_host,
        port=port or config.api_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
