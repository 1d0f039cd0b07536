"""Tests for registry record parsing."""

import json
import logging

import pytest

from parsing import (
    load_animals,
    normalize_gender,
    parse_animal,
    parse_animals,
    parse_date_string,
)


class TestParseDateString:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2021-03-14", "2021-03-14"),
            ("2021-03-14T00:00:00.000Z", "2021-03-14"),
            ("14/03/2021", "2021-03-14"),
            ("4.3.2021", "2021-03-04"),
            ("14 mars 2021", "2021-03-14"),
            ("14 Mar 2021", "2021-03-14"),
            ("févr. 2021", "2021-02-01"),
            ("March, 2021", "2021-03-01"),
            ("2021", "2021-01-01"),
        ],
    )
    def test_formats(self, raw, expected):
        assert parse_date_string(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "13/25/2021", "someday", "2021-13-01"])
    def test_unparseable(self, raw):
        assert parse_date_string(raw) is None


class TestNormalizeGender:
    @pytest.mark.parametrize("raw", ["Male", "male", "M", " MALE ", "Mâle"])
    def test_male(self, raw):
        assert normalize_gender(raw) == "Male"

    @pytest.mark.parametrize("raw", ["Female", "f", "femelle", None, "", "unknown"])
    def test_everything_else_is_female(self, raw):
        assert normalize_gender(raw) == "Female"


class TestParseAnimal:
    def test_full_record(self):
        animal = parse_animal(
            {
                "id": 42,
                "name": "Roxane",
                "gender": "Female",
                "sireId": "7",
                "damId": "",
                "tagId": "FR123",
                "birthDate": "2020-05-01",
                "breed": "Charolaise",
            }
        )
        assert animal.id == "42"
        assert animal.sire_id == "7"
        assert animal.dam_id is None
        assert animal.sex == "F"
        assert animal.birth_date == "2020-05-01"

    def test_name_defaults_to_id(self):
        assert parse_animal({"id": "A1"}).name == "A1"

    def test_missing_id(self):
        assert parse_animal({"name": "Nameless"}) is None

    def test_skips_and_logs(self, caplog):
        with caplog.at_level(logging.WARNING, logger="parsing"):
            animals = parse_animals([{"id": "A"}, {"id": " "}, {"name": "x"}])
        assert [a.id for a in animals] == ["A"]
        assert "Skipped 2" in caplog.text


class TestLoadAnimals:
    def test_list(self, tmp_path):
        path = tmp_path / "herd.json"
        path.write_text(json.dumps([{"id": "A", "gender": "M"}, {"id": "B", "sireId": "A"}]))
        animals = load_animals(path)
        assert [a.id for a in animals] == ["A", "B"]
        assert animals[0].gender == "Male"

    def test_wrapped(self, tmp_path):
        path = tmp_path / "herd.json"
        path.write_text(json.dumps({"animals": [{"id": "A"}, "junk"]}))
        assert [a.id for a in load_animals(path)] == ["A"]

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "herd.json"
        path.write_text(json.dumps({"herd": []}))
        with pytest.raises(ValueError):
            load_animals(path)
