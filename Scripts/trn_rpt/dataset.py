"""
Load the training dataset (JSON array of employees with completion lists) into
two flat frames:

  roster       one row per employee, input order  (emp_idx, Employee)
  completions  one row per raw completion record   (emp_idx, Employee, seq, Training,
                                                    timestamp_raw, expires_raw,
                                                    Timestamp, Expires)

`seq` is the record's position in the employee's completion list. Dates are
parsed leniently; anything unparseable becomes NaT.
"""
from __future__ import annotations
import json
from pathlib import Path
import pandas as pd
from .errors import InputMalformed, InputUnreadable

ROSTER_COLS = ["emp_idx", "Employee"]
RAW_COLS = ["emp_idx", "Employee", "seq", "Training", "timestamp_raw", "expires_raw"]

def read_training_json(path: Path):
    path = Path(path)
    try:
        txt = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise InputUnreadable(f"Training data not found: {path}", path) from None
    except (OSError, UnicodeDecodeError) as e:
        raise InputUnreadable(f"Error reading training data {path}: {e}", path) from e
    try:
        return json.loads(txt)
    except json.JSONDecodeError as e:
        raise InputMalformed(f"Training data {path} is not valid JSON: {e}", path) from e

def _to_naive(v):
    # wall time as written; offsets are dropped, not converted
    try:
        t = pd.Timestamp(v)
    except (ValueError, TypeError, OverflowError):
        return pd.NaT
    if t is pd.NaT: return pd.NaT
    if t.tzinfo is not None: t = t.tz_localize(None)
    # outside the ns range (e.g. a 9999-12-31 "never" placeholder) counts as unparseable
    if not (pd.Timestamp.min <= t <= pd.Timestamp.max): return pd.NaT
    return t.as_unit("ns")

def parse_dates(s: pd.Series) -> pd.Series:
    # non-strings (numbers, null, objects) are treated as unparseable
    vals = [_to_naive(v) if isinstance(v, str) else pd.NaT for v in s]
    return pd.Series(vals, index=s.index, dtype="datetime64[ns]")

def flatten_employees(data, source: Path | str | None = None) -> tuple[pd.DataFrame, pd.DataFrame]:
    if not isinstance(data, list):
        raise InputMalformed(f"Expected a list of employees, got {type(data).__name__}", source)
    emp_rows, rows = [], []
    for i, emp in enumerate(data):
        if not isinstance(emp, dict) or not isinstance(emp.get("name"), str):
            raise InputMalformed(f"Employee #{i} has no 'name' string", source)
        comps = emp.get("completions") or []
        if not isinstance(comps, list):
            raise InputMalformed(f"Employee {emp['name']!r}: 'completions' must be a list", source)
        emp_rows.append({"emp_idx": i, "Employee": emp["name"]})
        for j, c in enumerate(comps):
            if not isinstance(c, dict) or not isinstance(c.get("name"), str):
                raise InputMalformed(f"Employee {emp['name']!r}: completion #{j} has no 'name' string", source)
            rows.append({
                "emp_idx": i, "Employee": emp["name"], "seq": j, "Training": c["name"],
                "timestamp_raw": c.get("timestamp"), "expires_raw": c.get("expires"),
            })
    roster = pd.DataFrame(emp_rows, columns=ROSTER_COLS).astype({"emp_idx": "int64"})
    comp = pd.DataFrame(rows, columns=RAW_COLS).astype({"emp_idx": "int64", "seq": "int64"})
    comp["Timestamp"] = parse_dates(comp["timestamp_raw"])
    comp["Expires"] = parse_dates(comp["expires_raw"])
    return roster, comp

def load_trainings(path: Path) -> tuple[pd.DataFrame, pd.DataFrame]:
    roster, comp = flatten_employees(read_training_json(path), source=path)
    print(f"[INFO] Loaded {len(roster)} employees / {len(comp)} completion records from {path}")
    return roster, comp
