"""
fiscal_core.paths
Output folder helpers.
"""
from __future__ import annotations
from pathlib import Path

OUTPUT_DIR = Path("output")
OUT_XLSX_DIR = OUTPUT_DIR / "xlsx"
OUT_PDF_DIR = OUTPUT_DIR / "pdf"
OUT_LOG_DIR = OUTPUT_DIR / "logs"

def ensure_output_dirs(base_dir: Path | None = None) -> None:
    root = base_dir or Path(".")
    for d in (OUT_XLSX_DIR, OUT_PDF_DIR, OUT_LOG_DIR):
        (root / d).mkdir(parents=True, exist_ok=True)

def out_path(kind: str, filename: str, base_dir: Path | None = None) -> Path:
    ensure_output_dirs(base_dir)
    root = base_dir or Path(".")
    k = kind.lower()
    if k == "xlsx":
        return root / OUT_XLSX_DIR / filename
    if k == "pdf":
        return root / OUT_PDF_DIR / filename
    if k == "log":
        return root / OUT_LOG_DIR / filename
    raise ValueError(f"Unknown output kind: {kind}")
