# Scripts/trn_rpt/settings.py
from __future__ import annotations
import json
from pathlib import Path
from datetime import date
from .errors import SettingsInvalid
from .reports import fiscal_year_for

BASE = Path(__file__).resolve().parent.parent.parent
SETTINGS_FILE = BASE / "Config" / "settings.json5"

def load_settings(path: Path = SETTINGS_FILE) -> dict:
    # strip // comment lines, the rest is plain JSON
    path = Path(path)
    if not path.exists(): return {}
    txt = path.read_text(encoding="utf-8")
    cleaned = "\n".join([ln for ln in txt.splitlines() if not ln.strip().startswith("//")])
    try: return json.loads(cleaned or "{}")
    except json.JSONDecodeError as e:
        print(f"[WARN] Could not parse {path} ({e}); using defaults.")
        return {}

def resolve_run_params(settings: dict, *, as_of: date, trainings=None, fiscal_year=None,
                       strict_dates=None) -> dict:
    """CLI values win over settings; fiscal year falls back to the one containing as_of."""
    tracked = list(trainings) if trainings else list(settings.get("tracked_trainings", []))
    fy = fiscal_year if fiscal_year is not None else settings.get("fiscal_year")
    try:
        fy = int(fy) if fy is not None else fiscal_year_for(as_of)
    except (TypeError, ValueError):
        raise SettingsInvalid(f"fiscal_year must be a year number, got {fy!r}") from None
    strict = strict_dates if strict_dates is not None else bool(settings.get("strict_dates", False))
    if not tracked:
        print("[WARN] No tracked trainings configured; fiscal-year report will be empty.")
    return dict(tracked_trainings=tracked, fiscal_year=fy, as_of=as_of, strict_dates=strict)
