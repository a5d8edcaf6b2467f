"""Tests for puzzle content loading in config/game_settings.py."""

import copy
import datetime as dt
import json

import pytest

from ppt_game.config.game_settings import load_puzzle_data, parse_puzzle_data
from ppt_game.models.puzzle import Category, PuzzleContentError

from conftest import make_raw_puzzle


def content(*puzzles, start="2025-01-01"):
    return {"startDate": start, "puzzles": list(puzzles) or [make_raw_puzzle()]}


class TestParsePuzzleData:
    def test_valid(self):
        data = parse_puzzle_data(content(make_raw_puzzle(), make_raw_puzzle()))
        assert data.start_date == dt.date(2025, 1, 1)
        assert [p.id for p in data.puzzles] == [1, 2]
        cell = data.puzzles[0].cell(0, 2)
        assert cell.category is Category.THINGS
        assert cell.acceptable_answers == ("Bike",)

    def test_iso_datetime_start(self):
        data = parse_puzzle_data(content(start="2025-01-01T00:00:00.000Z"))
        assert data.start_date == dt.date(2025, 1, 1)

    def test_missing_start(self):
        with pytest.raises(PuzzleContentError):
            parse_puzzle_data({"puzzles": [make_raw_puzzle()]})

    def test_empty(self):
        with pytest.raises(PuzzleContentError):
            parse_puzzle_data({"startDate": "2025-01-01", "puzzles": []})

    def test_wrong_row_count(self):
        raw = make_raw_puzzle()
        raw["rows"].pop()
        with pytest.raises(PuzzleContentError):
            parse_puzzle_data(content(raw))

    def test_wrong_cell_count(self):
        raw = make_raw_puzzle()
        raw["rows"][1]["cells"].append(copy.deepcopy(raw["rows"][1]["cells"][0]))
        with pytest.raises(PuzzleContentError):
            parse_puzzle_data(content(raw))

    def test_column_order(self):
        raw = make_raw_puzzle()
        cells = raw["rows"][0]["cells"]
        cells[0], cells[1] = cells[1], cells[0]
        with pytest.raises(PuzzleContentError):
            parse_puzzle_data(content(raw))

    def test_unknown_category(self):
        raw = make_raw_puzzle()
        raw["rows"][0]["cells"][0]["category"] = "animals"
        with pytest.raises(PuzzleContentError):
            parse_puzzle_data(content(raw))

    def test_blank_answer(self):
        raw = make_raw_puzzle()
        raw["rows"][2]["cells"][1]["answer"] = "  "
        with pytest.raises(PuzzleContentError):
            parse_puzzle_data(content(raw))

    def test_acceptable_answers_must_be_a_list(self):
        raw = make_raw_puzzle()
        raw["rows"][0]["cells"][2]["acceptableAnswers"] = "Bike"
        with pytest.raises(PuzzleContentError):
            parse_puzzle_data(content(raw))

    def test_acceptable_answers_must_hold_strings(self):
        raw = make_raw_puzzle()
        raw["rows"][0]["cells"][2]["acceptableAnswers"] = ["Bike", 7]
        with pytest.raises(PuzzleContentError):
            parse_puzzle_data(content(raw))

    def test_null_acceptable_answers(self):
        raw = make_raw_puzzle()
        raw["rows"][0]["cells"][2]["acceptableAnswers"] = None
        cell = parse_puzzle_data(content(raw)).puzzles[0].cell(0, 2)
        assert cell.acceptable_answers == ()

    @pytest.mark.parametrize("field,value", [
        ("answer", 42),
        ("clue", None),
        ("clue2", ["Wall"]),
    ])
    def test_text_fields_must_be_strings(self, field, value):
        raw = make_raw_puzzle()
        raw["rows"][0]["cells"][1][field] = value
        with pytest.raises(PuzzleContentError):
            parse_puzzle_data(content(raw))

    def test_constraint_must_be_a_string(self):
        raw = make_raw_puzzle()
        raw["rows"][1]["constraint"] = 3
        with pytest.raises(PuzzleContentError):
            parse_puzzle_data(content(raw))

    def test_missing_answer(self):
        raw = make_raw_puzzle()
        del raw["rows"][2]["cells"][1]["answer"]
        with pytest.raises(PuzzleContentError):
            parse_puzzle_data(content(raw))


class TestLoadPuzzleData:
    def test_bundled_content(self):
        data = load_puzzle_data()
        assert data.puzzles
        assert all(len(p.rows) == 3 for p in data.puzzles)

    def test_from_file(self, tmp_path):
        path = tmp_path / "puzzles.json"
        path.write_text(json.dumps(content()), encoding="utf-8")
        assert len(load_puzzle_data(str(path)).puzzles) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_puzzle_data(str(tmp_path / "nope.json"))

    def test_bad_json(self, tmp_path):
        path = tmp_path / "puzzles.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(PuzzleContentError):
            load_puzzle_data(str(path))


class TestPublicView:
    def test_no_answers(self, puzzle):
        view = puzzle.public_view()
        text = json.dumps(view)
        assert "Beethoven" not in text
        assert view["rows"][0]["cells"][0]["clue"] == "Composer"
