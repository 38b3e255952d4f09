# Scripts/trn_rpt/timeutil.py
from __future__ import annotations
from pathlib import Path
from datetime import date, datetime
import zoneinfo

NY = zoneinfo.ZoneInfo("America/New_York")

def now_ny() -> datetime:
    return datetime.now(tz=NY)

def ts_ny() -> str:
    return now_ny().strftime("%Y%m%d_%H%M")

def today_ny() -> date:
    return now_ny().date()

def newest(path_glob: str, root: Path | None = None) -> Path | None:
    paths = sorted((root or Path()).glob(path_glob))
    return paths[-1] if paths else None
