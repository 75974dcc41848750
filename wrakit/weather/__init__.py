from .wtk_source import (
    normalize_column_name,
    parse_wtk_csv,
    build_wtk_request,
    fetch_wtk_series,
)
