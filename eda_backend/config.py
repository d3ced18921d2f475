"""
Configuration constants and settings for the EDA dashboard backend.

This module centralizes all configuration values including:
- Column classification threshold
- Upload gate (size limit, accepted extensions, decode attempts)
- Histogram, preview and export formatting parameters
- API settings
"""
import os
from typing import List
from dotenv import load_dotenv

load_dotenv()

# ============================================================================
# Column classification
# ============================================================================
# A column is numeric when strictly more than this share of its non-null
# values parse as numbers.
NUMERIC_RATIO_THRESHOLD = 0.8

# ============================================================================
# Upload gate
# ============================================================================
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))
MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024
ALLOWED_EXTENSIONS = (".csv",)

# utf-8-sig also reads plain utf-8 and drops a leading BOM.
# CSV files exported from Windows tools often use cp1252/latin-1
CSV_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")

# ============================================================================
# Histograms
# ============================================================================
HISTOGRAM_MIN_BINS = 5
HISTOGRAM_MAX_BINS = 20

# ============================================================================
# Data preview
# ============================================================================
PREVIEW_ROWS_PER_PAGE = int(os.getenv("PREVIEW_ROWS_PER_PAGE", "10"))

# ============================================================================
# Exports
# ============================================================================
EXPORT_DECIMALS = 4
REPORT_DECIMALS = 2
REPORT_MAX_STATS_ROWS = 15
REPORT_MAX_CORRELATION_COLUMNS = 6
REPORT_TITLE = os.getenv("REPORT_TITLE", "Interactive EDA Dashboard - Analysis Report")
EXPORT_FILE_PREFIX = os.getenv("EXPORT_FILE_PREFIX", "eda")

# ============================================================================
# API
# ============================================================================
CORS_ALLOW_ORIGINS = os.getenv("CORS_ALLOW_ORIGINS", "*")


def allowed_origins() -> List[str]:
    """
    Get the list of origins allowed by the CORS middleware.

    Returns:
        List of origins parsed from the comma-separated CORS_ALLOW_ORIGINS value
    """
    return [origin.strip() for origin in CORS_ALLOW_ORIGINS.split(",") if origin.strip()]
