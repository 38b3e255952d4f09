# Scripts/trn_rpt/reports.py
from __future__ import annotations
from datetime import date
import numpy as np, pandas as pd

EXPIRED = "expired"
EXPIRES_SOON = "expires soon"

def completion_counts(norm: pd.DataFrame) -> pd.DataFrame:
    """Employees holding each training, in first-seen order of the normalized scan."""
    if norm.empty: return pd.DataFrame({"Training": pd.Series(dtype=object), "Count": pd.Series(dtype="int64")})
    g = norm.groupby("Training", sort=False)["emp_idx"].nunique()
    return g.rename("Count").reset_index()

def fiscal_year_for(d: date) -> int:
    """Fiscal years run July 1 -> June 30 and are named by the June they end in."""
    return d.year + 1 if d.month >= 7 else d.year

def fiscal_year_window(year: int) -> tuple[pd.Timestamp, pd.Timestamp]:
    return pd.Timestamp(year - 1, 7, 1), pd.Timestamp(year, 6, 30)

def split_name(name: str) -> tuple[str, str]:
    """
    (first, last) where last is the final whitespace-delimited token.
    Middle names stay with the first name and suffixes ("Jr.") are taken as the
    last name. A single token is a last name with no first name.
    """
    parts = str(name).split()
    if not parts: return "", ""
    return " ".join(parts[:-1]), parts[-1]

def name_sort_key(name: str) -> tuple[str, str]:
    first, last = split_name(name)
    return last, first

def fiscal_year_roster(norm: pd.DataFrame, trainings: list[str], year: int) -> pd.DataFrame:
    # one row per requested training, even when nobody completed it
    start, end = fiscal_year_window(year)
    day = norm["Timestamp"].dt.normalize()
    in_fy = norm.loc[day.between(start, end)]
    rows = []
    for t in trainings:
        names = in_fy.loc[in_fy["Training"].eq(t), "Employee"].tolist()
        rows.append({"Training": t, "CompletedBy": sorted(names, key=name_sort_key)})
    return pd.DataFrame(rows, columns=["Training", "CompletedBy"])

def add_one_month(d) -> pd.Timestamp:
    # Jan 31 -> Feb 28/29
    return pd.Timestamp(d).normalize() + pd.DateOffset(months=1)

def expiring_trainings(norm: pd.DataFrame, as_of) -> pd.DataFrame:
    """
    Completions already expired, or expiring within one month of `as_of`
    (inclusive on both ends), compared by calendar day. Completions without an
    expiration date never qualify.
    """
    cols = ["emp_idx", "Employee", "Training", "Expires", "Status"]
    ref = pd.Timestamp(as_of).normalize()
    soon = add_one_month(ref)
    exp_day = norm["Expires"].dt.normalize()
    out = norm.loc[exp_day.notna() & exp_day.le(soon), cols[:-1]].copy()
    out["Status"] = np.where(exp_day.loc[out.index].lt(ref), EXPIRED, EXPIRES_SOON)
    return out.reset_index(drop=True)
