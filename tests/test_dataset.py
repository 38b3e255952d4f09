"""
Tests for loading the training dataset.

Run with: pytest tests/test_dataset.py
"""
import json

import pandas as pd
import pytest

from trn_rpt.dataset import flatten_employees, load_trainings, parse_dates, read_training_json
from trn_rpt.errors import InputMalformed, InputUnreadable, TrainingDataError
from conftest import emp, rec


class TestReadTrainingJson:

    def test_missing_file_is_unreadable(self, tmp_path):
        with pytest.raises(InputUnreadable) as exc:
            read_training_json(tmp_path / "nope.json")
        assert "nope.json" in exc.value.message

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(InputUnreadable):
            read_training_json(tmp_path)

    def test_invalid_json_is_malformed(self, tmp_path):
        p = tmp_path / "bad.json"
        p.write_text("[{not json", encoding="utf-8")
        with pytest.raises(InputMalformed):
            read_training_json(p)

    def test_errors_share_base_class(self):
        assert issubclass(InputUnreadable, TrainingDataError)
        assert issubclass(InputMalformed, TrainingDataError)


class TestFlattenEmployees:

    def test_top_level_must_be_list(self):
        with pytest.raises(InputMalformed):
            flatten_employees({"name": "Jane Doe"})

    def test_employee_needs_name(self):
        with pytest.raises(InputMalformed):
            flatten_employees([{"completions": []}])

    def test_completions_must_be_list(self):
        with pytest.raises(InputMalformed):
            flatten_employees([{"name": "Jane Doe", "completions": "X-Ray Safety"}])

    def test_completion_needs_name(self):
        with pytest.raises(InputMalformed):
            flatten_employees([emp("Jane Doe", {"timestamp": "2023-01-01"})])

    def test_missing_or_null_completions_mean_none(self):
        roster, comp = flatten_employees([{"name": "A B"}, {"name": "C D", "completions": None}])
        assert roster["Employee"].tolist() == ["A B", "C D"]
        assert comp.empty

    def test_empty_dataset(self):
        roster, comp = flatten_employees([])
        assert roster.empty and comp.empty
        assert str(comp["Timestamp"].dtype).startswith("datetime64")

    def test_rows_keep_input_order(self, sample_data):
        roster, comp = flatten_employees(sample_data)
        assert roster["Employee"].tolist() == ["Jane Doe", "Bob Ray", "Amy Zed", "Cal Empty"]
        jane = comp[comp["Employee"] == "Jane Doe"]
        assert jane["Training"].tolist() == ["X-Ray Safety", "Electrical Safety", "X-Ray Safety"]
        assert jane["seq"].tolist() == [0, 1, 2]

    def test_absent_expires_is_nat(self):
        _, comp = flatten_employees([emp("Jane Doe", rec("X-Ray Safety", "2023-01-01"))])
        assert pd.isna(comp.loc[0, "Expires"])
        assert comp.loc[0, "Timestamp"] == pd.Timestamp("2023-01-01")

    def test_unparseable_timestamp_is_nat(self):
        _, comp = flatten_employees([emp("Jane Doe", rec("X-Ray Safety", "someday"))])
        assert pd.isna(comp.loc[0, "Timestamp"])
        assert comp.loc[0, "timestamp_raw"] == "someday"


class TestParseDates:

    def test_us_and_iso_formats_agree(self):
        out = parse_dates(pd.Series(["2023-06-01", "06/01/2023"], dtype=object))
        assert out.iloc[0] == out.iloc[1] == pd.Timestamp("2023-06-01")

    def test_offsets_become_naive(self):
        out = parse_dates(pd.Series(["2023-06-01T00:00:00Z"], dtype=object))
        assert out.iloc[0] == pd.Timestamp("2023-06-01")

    def test_offset_keeps_written_day(self):
        out = parse_dates(pd.Series(["2024-06-30T21:00:00-05:00"], dtype=object))
        assert out.iloc[0] == pd.Timestamp("2024-06-30 21:00:00")

    def test_out_of_range_dates_are_unparseable(self):
        out = parse_dates(pd.Series(["12/31/9999", "9999-12-31", "1500-01-01", "2023-01-01"], dtype=object))
        assert out.iloc[:3].isna().all()
        assert out.iloc[3] == pd.Timestamp("2023-01-01")
        assert str(out.dtype) == "datetime64[ns]"

    def test_non_strings_are_unparseable(self):
        out = parse_dates(pd.Series([20230601, None], dtype=object))
        assert out.isna().all()


def test_load_trainings_reports_counts(dataset_file, capsys):
    roster, comp = load_trainings(dataset_file)
    assert len(roster) == 4
    assert len(comp) == 6
    assert "[INFO] Loaded 4 employees / 6 completion records" in capsys.readouterr().out


def test_far_dates_do_not_abort_flattening():
    _, comp = flatten_employees([emp("A B",
                                     rec("T", "2023-01-01", "12/31/9999"),
                                     rec("U", "1500-01-01"))])
    assert pd.isna(comp.loc[0, "Expires"])
    assert comp.loc[0, "Timestamp"] == pd.Timestamp("2023-01-01")
    assert pd.isna(comp.loc[1, "Timestamp"])
