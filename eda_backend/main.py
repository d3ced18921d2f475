"""
FastAPI application for the EDA dashboard.

Endpoints:
- CSV profiling (typed rows, column types, statistics, correlations)
- Paginated row preview and histograms
- Exports (statistics CSV, correlation CSV, PDF report)

Every request carries the CSV upload and is profiled from scratch; nothing
is kept between requests.
"""
from typing import List

from fastapi import FastAPI, UploadFile, File, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from eda_backend.models import Histogram, ProfileResult, RowPage
from eda_backend.services import distribution, export, ingestion, preview, profiler
from eda_backend.config import MAX_UPLOAD_MB, PREVIEW_ROWS_PER_PAGE, allowed_origins

# ============================================================================
# App init
# ============================================================================
app = FastAPI(title="EDA Dashboard - CSV Profiling API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    print(f"[VALIDATION ERROR] URL: {request.url}")
    print(f"[VALIDATION ERROR] Errors: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> List[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": str(err.get("msg", "")), "type": err.get("type", "")}
        for err in exc.errors()
    ]


# ============================================================================
# Startup
# ============================================================================

@app.on_event("startup")
async def startup_event():
    print("=" * 60)
    print("Initializing EDA Dashboard API")
    print(f"  Max upload size: {MAX_UPLOAD_MB}MB")
    print(f"  Preview rows per page: {PREVIEW_ROWS_PER_PAGE}")
    print("=" * 60)


# ============================================================================
# Helpers
# ============================================================================

async def _profile_upload(file: UploadFile) -> ProfileResult:
    """Read, validate and profile an uploaded CSV file."""
    content = await file.read()
    try:
        records = ingestion.read_csv_records(file.filename, content)
    except ingestion.FileTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except ingestion.IngestionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = profiler.profile(records)
    print(
        f"[PROFILE] {file.filename}: {len(result.rows)} rows, "
        f"{len(result.numeric_columns)} numeric / {len(result.categorical_columns)} categorical columns"
    )
    return result


def _attachment(content, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ============================================================================
# Profile / Preview / Distribution endpoints
# ============================================================================

@app.get("/")
async def root():
    return {"status": "ok", "message": "EDA Dashboard API"}


@app.post("/profile/", response_model=ProfileResult)
async def profile_csv(file: UploadFile = File(...)):
    return await _profile_upload(file)


@app.post("/preview/", response_model=RowPage)
async def preview_csv(file: UploadFile = File(...), page: int = Query(0, ge=0)):
    result = await _profile_upload(file)
    return preview.paginate_rows(result.rows, page)


@app.post("/histograms/", response_model=List[Histogram])
async def histograms_csv(file: UploadFile = File(...)):
    result = await _profile_upload(file)
    return distribution.build_histograms(result)


# ============================================================================
# Exports
# ============================================================================

@app.post("/export/stats/")
async def export_stats(file: UploadFile = File(...)):
    result = await _profile_upload(file)
    return _attachment(
        export.stats_to_csv(result),
        "text/csv; charset=utf-8",
        export.export_filename("stats"),
    )


@app.post("/export/correlations/")
async def export_correlations(file: UploadFile = File(...)):
    result = await _profile_upload(file)
    try:
        content = export.correlations_to_csv(result)
    except export.NotEnoughNumericColumnsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _attachment(content, "text/csv; charset=utf-8", export.export_filename("correlations"))


@app.post("/export/report/")
async def export_report(file: UploadFile = File(...)):
    result = await _profile_upload(file)
    return _attachment(
        export.render_pdf_report(result),
        "application/pdf",
        export.export_filename("report"),
    )
