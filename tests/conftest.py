import json

import pytest

from trn_rpt.dataset import flatten_employees
from trn_rpt.normalize import latest_completions


def emp(name, *completions):
    return {"name": name, "completions": list(completions)}


def rec(training, timestamp, expires=None):
    c = {"name": training, "timestamp": timestamp}
    if expires is not None:
        c["expires"] = expires
    return c


@pytest.fixture
def normalized():
    """Build the normalized completions frame from JSON-shaped employees."""
    def _build(data, strict=False):
        _, raw = flatten_employees(data)
        return latest_completions(raw, strict=strict)
    return _build


@pytest.fixture
def sample_data():
    return [
        emp("Jane Doe",
            rec("X-Ray Safety", "2023-01-01"),
            rec("Electrical Safety", "2023-08-15", "2024-08-15"),
            rec("X-Ray Safety", "2023-06-01", "2023-10-15")),
        emp("Bob Ray",
            rec("Lab Safety", "2023-08-01", "2023-09-15")),
        emp("Amy Zed",
            rec("Lab Safety", "2023-08-01"),
            rec("X-Ray Safety", "2022-05-01", "2024-01-01")),
        emp("Cal Empty"),
    ]


@pytest.fixture
def dataset_file(tmp_path, sample_data):
    p = tmp_path / "trainings.json"
    p.write_text(json.dumps(sample_data), encoding="utf-8")
    return p
