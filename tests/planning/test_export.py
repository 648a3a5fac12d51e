import csv
from pathlib import Path

import pytest

from romnamer.planning.export import PLAN_CSV_COLUMNS, write_plan_csv, write_unmatched_list
from romnamer.planning.planner import PlanAction, PlanItem


@pytest.mark.unit
def test_write_plan_csv(tmp_path):
    items = [
        PlanItem(PlanAction.MATCH_HEADERED, Path("/r/rom1.nes"), "rom1.nes", "Game, The.nes", "3D2F688C", "nes.dat"),
        PlanItem(PlanAction.PREFIX_STRIP, Path("/r/0042 - X.nes"), "0042 - X.nes", "X.nes"),
    ]
    out = tmp_path / "reports" / "plan.csv"

    assert write_plan_csv(items, out) == 2

    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))

    assert rows[0] == PLAN_CSV_COLUMNS
    assert rows[1] == ["match-headered", "rom1.nes", "Game, The.nes", "3D2F688C", "nes.dat"]
    assert rows[2] == ["prefix-strip", "0042 - X.nes", "X.nes", "", ""]


@pytest.mark.unit
def test_write_empty_plan_has_header_only(tmp_path):
    out = tmp_path / "plan.csv"
    write_plan_csv([], out)
    assert out.read_text(encoding="utf-8").splitlines() == [",".join(PLAN_CSV_COLUMNS)]


@pytest.mark.unit
def test_write_unmatched_list(tmp_path):
    out = tmp_path / "unmatched.txt"
    assert write_unmatched_list(["b.nes", "a.nes"], out) == 2
    assert out.read_text(encoding="utf-8") == "b.nes\na.nes\n"
