# Scripts/trn_rpt/normalize.py
from __future__ import annotations
import pandas as pd
from .errors import InputMalformed

KEYS = ["emp_idx", "Training"]

def latest_completions(comp: pd.DataFrame, strict: bool = False) -> pd.DataFrame:
    """
    Reduce raw completions to one row per (employee, training): the record with
    the latest Timestamp. Records are scanned in input order and only a strictly
    newer timestamp replaces the current best, so ties keep the first record seen.

    Rows come back grouped by employee, trainings in first-seen order, with
    `seq` renumbered to that order. Records whose timestamp did not parse are
    never candidates; with strict=True they raise InputMalformed instead.
    """
    comp = comp.sort_values(["emp_idx", "seq"], kind="stable").reset_index(drop=True)
    undated = comp["Timestamp"].isna()
    if undated.any():
        bad = comp.loc[undated].iloc[0]
        msg = (f"{int(undated.sum())} completion(s) with an unparseable timestamp "
               f"(first: {bad['Employee']!r} / {bad['Training']!r}: {bad['timestamp_raw']!r})")
        if strict: raise InputMalformed(msg)
        print(f"[WARN] Ignoring {msg}")
    valid = comp.loc[~undated]
    if valid.empty:
        return valid.reset_index(drop=True)

    best = valid.groupby(KEYS, sort=False)["Timestamp"].idxmax()
    out = valid.loc[best.to_numpy()].reset_index(drop=True)
    out["seq"] = out.groupby("emp_idx").cumcount()
    return out
