"""
Turn report frames into the JSON documents we hand out, and persist them.

Count:       {"trainings": [{"name", "count"}]}
Fiscal year: {"trainings": [{"name", "completedBy": [...]}]}
Expiration:  {"employees": [{"name", "trainings": [{"name", "status"}]}]}
"""
from __future__ import annotations
import json
from pathlib import Path
import pandas as pd
from xlsxwriter.exceptions import XlsxWriterException
from .errors import OutputUnwritable

def count_artifact(counts: pd.DataFrame) -> dict:
    return {"trainings": [{"name": r.Training, "count": int(r.Count)} for r in counts.itertuples(index=False)]}

def fiscal_year_artifact(roster: pd.DataFrame) -> dict:
    return {"trainings": [{"name": r.Training, "completedBy": list(r.CompletedBy)}
                          for r in roster.itertuples(index=False)]}

def expiration_artifact(expiring: pd.DataFrame) -> dict:
    employees = []
    for _, g in expiring.groupby("emp_idx", sort=True):
        employees.append({
            "name": g["Employee"].iloc[0],
            "trainings": [{"name": t, "status": s} for t, s in zip(g["Training"], g["Status"])],
        })
    return {"employees": employees}

def output_paths(out_dir: Path, fiscal_year: int, ts: str) -> dict[str, Path]:
    out_dir = Path(out_dir)
    return {
        "counts": out_dir / f"training_counts_{ts}.json",
        "fiscal_year": out_dir / f"fy{fiscal_year}_completions_{ts}.json",
        "expiration": out_dir / f"expiring_trainings_{ts}.json",
        "excel": out_dir / f"Training_Reports_{ts}.xlsx",
    }

def write_json(path: Path, payload: dict) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except OSError as e:
        raise OutputUnwritable(f"Cannot write {path}: {e}", path) from e
    return path

def write_excel(path: Path, counts: pd.DataFrame, roster: pd.DataFrame, expiring: pd.DataFrame,
                fiscal_year: int, meta: dict) -> Path:
    path = Path(path)
    try:
        # one row per (training, employee); trainings nobody completed keep a blank row
        fy = roster.explode("CompletedBy").rename(columns={"CompletedBy": "Employee"})
        exp = expiring.drop(columns=["emp_idx"]).copy()
        exp["Expires"] = exp["Expires"].dt.strftime("%Y-%m-%d")
        path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(path, engine="xlsxwriter") as w:
            counts.to_excel(w, sheet_name="Completion_Counts", index=False)
            fy.to_excel(w, sheet_name=f"FY{fiscal_year}_Roster", index=False)
            exp.to_excel(w, sheet_name="Expiring", index=False)
            pd.DataFrame({k: [str(v)] for k, v in meta.items()}).to_excel(w, sheet_name="Run_Metadata", index=False)
    except (OSError, ValueError, XlsxWriterException) as e:
        raise OutputUnwritable(f"Cannot write {path}: {e}", path) from e
    return path
