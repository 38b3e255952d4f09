# Scripts/build_training_reports.py
from __future__ import annotations
import argparse, sys
from pathlib import Path
from datetime import date
from trn_rpt.timeutil import newest, ts_ny, today_ny
from trn_rpt.settings import load_settings, resolve_run_params, SETTINGS_FILE
from trn_rpt.errors import InputMalformed, InputUnreadable, OutputUnwritable, SettingsInvalid
from trn_rpt.dataset import load_trainings
from trn_rpt.normalize import latest_completions
from trn_rpt.reports import completion_counts, fiscal_year_roster, expiring_trainings
from trn_rpt.artifacts import (count_artifact, fiscal_year_artifact, expiration_artifact,
                               output_paths, write_json, write_excel)

EXIT_OUTPUT_FAILED = 1
EXIT_INPUT_UNREADABLE = 2
EXIT_INPUT_MALFORMED = 3
EXIT_BAD_SETTINGS = 4

def run_stage(label: str, write) -> bool:
    """Persist one artifact; a write failure is reported and the run carries on."""
    try:
        path = write()
    except OutputUnwritable as e:
        print(f"[ERR] {label} not written: {e.message}")
        return False
    print(f"[INFO] Wrote {label}: {path}")
    return True

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Build training completion reports (counts, fiscal-year roster, expirations).")
    ap.add_argument("--input", help="Training data JSON (default: settings input_json, else newest Inputs/*.json)")
    ap.add_argument("--settings", default=str(SETTINGS_FILE))
    ap.add_argument("--out-dir", help="Output folder (default: settings out_dir or Outputs)")
    ap.add_argument("--fiscal-year", type=int)
    ap.add_argument("--training", action="append", help="Tracked training for the fiscal-year roster (repeatable)")
    ap.add_argument("--as-of", type=date.fromisoformat, help="Reference date YYYY-MM-DD (default: today, New York)")
    ap.add_argument("--strict-dates", action="store_true", default=None,
                    help="Fail on unparseable completion timestamps instead of ignoring them")
    ap.add_argument("--excel", action="store_true", help="Also write an Excel package")
    return ap.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    settings = load_settings(Path(args.settings))
    try:
        p = resolve_run_params(settings, as_of=args.as_of or today_ny(), trainings=args.training,
                               fiscal_year=args.fiscal_year, strict_dates=args.strict_dates)
    except SettingsInvalid as e:
        print(f"[ERR] {e.message}")
        return EXIT_BAD_SETTINGS
    src = args.input or settings.get("input_json") or newest("Inputs/*.json")
    if src is None:
        print("[ERR] No training data given (--input) and none found in Inputs/.")
        return EXIT_INPUT_UNREADABLE
    src = Path(src)
    out_dir = Path(args.out_dir or settings.get("out_dir", "Outputs"))

    try:
        roster, raw = load_trainings(src)
        norm = latest_completions(raw, strict=p["strict_dates"])
    except InputUnreadable as e:
        print(f"[ERR] {e.message}")
        return EXIT_INPUT_UNREADABLE
    except InputMalformed as e:
        print(f"[ERR] {e.message}")
        return EXIT_INPUT_MALFORMED
    dropped = int(raw["Timestamp"].isna().sum())

    counts = completion_counts(norm)
    fy = fiscal_year_roster(norm, p["tracked_trainings"], p["fiscal_year"])
    expiring = expiring_trainings(norm, p["as_of"])

    paths = output_paths(out_dir, p["fiscal_year"], ts_ny())
    ok = [
        run_stage("completion counts", lambda: write_json(paths["counts"], count_artifact(counts))),
        run_stage(f"FY{p['fiscal_year']} roster", lambda: write_json(paths["fiscal_year"], fiscal_year_artifact(fy))),
        run_stage("expiration report", lambda: write_json(paths["expiration"], expiration_artifact(expiring))),
    ]
    if args.excel:
        meta = {
            "Source_TrainingData": src, "Fiscal_Year": p["fiscal_year"],
            "Reference_Date": p["as_of"].isoformat(), "Generated_Timestamp": ts_ny(),
        }
        ok.append(run_stage("Excel package", lambda: write_excel(paths["excel"], counts, fy, expiring,
                                                                 p["fiscal_year"], meta)))

    print(f"[SUMMARY] Employees: {len(roster)} | Raw completions: {len(raw)} | "
          f"Normalized: {len(norm)} | Dropped (bad timestamp): {dropped} | "
          f"Artifacts written: {sum(ok)}/{len(ok)}")
    return 0 if all(ok) else EXIT_OUTPUT_FAILED

if __name__ == "__main__":
    sys.exit(main())
