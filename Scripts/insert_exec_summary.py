#!/usr/bin/env python3
# Adds (or replaces) an Executive_Summary sheet to a Training_Reports workbook
from openpyxl import load_workbook
from openpyxl.styles import Alignment, Font
from pathlib import Path
import argparse
import sys

SHEET = "Executive_Summary"

SECTIONS = [
    ("Purpose", "Training compliance at a glance, built from the employee training data.\n"
                "Each employee's history is reduced to the most recent completion of every training."),
    ("Tabs", "• Completion_Counts — employees holding each training\n"
             "• FY<year>_Roster — who completed each tracked training between July 1 and June 30\n"
             "• Expiring — trainings already expired or expiring within one month of the reference date\n"
             "• Run_Metadata — source file, fiscal year, reference date, build time"),
    ("Notes", "Roster names are sorted by last name (final word of the name), then first name.\n"
              "Completions with an unreadable date are left out of every tab."),
]

def add_summary(path: Path) -> Path:
    wb = load_workbook(path)
    if SHEET in wb.sheetnames:
        del wb[SHEET]
    ws = wb.create_sheet(SHEET, 0)
    ws.sheet_view.showGridLines = False
    ws["A1"] = "Executive Summary — Training Completion Reports"
    ws["A1"].font = Font(bold=True, size=14)

    r = 3
    for h, body in SECTIONS:
        ws[f"A{r}"] = h; ws[f"A{r}"].font = Font(bold=True, size=11); r += 1
        for line in body.split("\n"):
            ws[f"A{r}"] = line
            ws[f"A{r}"].alignment = Alignment(wrap_text=True)
            r += 1
        r += 1
    ws.column_dimensions["A"].width = 120
    wb.save(path)
    return path

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--in-xlsx", required=True)
    args = ap.parse_args(argv)
    p = Path(args.in_xlsx)
    if not p.exists():
        raise SystemExit(f"[ERR] Workbook not found: {p}")
    add_summary(p)
    print(str(p))

if __name__ == "__main__":
    main(sys.argv[1:])
