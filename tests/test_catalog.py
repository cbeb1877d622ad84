"""Tests for the event catalog loader."""
import json

import pytest
from pydantic import ValidationError

from royal_court.game import catalog as event_catalog
from royal_court.game.errors import CatalogError


def test_documents_are_concatenated_in_order(sample_documents):
    events = event_catalog.load(sample_documents)

    assert len(events) == 6
    assert events[0].character == "Farmer Hob"
    assert events[3].character == "Duke Reynard"
    assert events[-1].character == "The Jester"


def test_json_text_documents(sample_documents):
    events = event_catalog.load([json.dumps(doc) for doc in sample_documents])
    assert len(events) == 6


def test_duplicates_are_kept_as_copies(sample_documents):
    events = event_catalog.load(sample_documents + sample_documents)

    assert len(events) == 12
    assert events[0] == events[6]
    assert events[0] is not events[6]


def test_consequence_aliases_and_defaults(catalog):
    farmer = catalog[0]
    give_grain = farmer.choices[0]

    assert give_grain.lethal is False
    assert give_grain.consequences[0].field == "money"
    assert give_grain.consequences[0].min_change == -10
    assert give_grain.consequences[0].is_fixed
    assert not give_grain.consequences[1].is_fixed

    assert catalog[2].choices[1].lethal is True


def test_missing_key_fails_load():
    doc = {"events": [{"character": "Nobody", "choices": []}]}
    with pytest.raises(CatalogError, match="description"):
        event_catalog.load([doc])


def test_unknown_key_fails_load(sample_documents):
    doc = {"events": [{"character": "A", "description": "B", "choices": [], "mood": "grumpy"}]}
    with pytest.raises(CatalogError):
        event_catalog.load(sample_documents + [doc])


def test_inverted_range_fails_load():
    doc = {"events": [{"character": "A", "description": "B", "choices": [
        {"description": "C", "consequences": [{"field": "love", "minChange": 5, "maxChange": -5}]},
    ]}]}
    with pytest.raises(CatalogError, match="maxChange"):
        event_catalog.load([doc])


def test_unparseable_json_names_document():
    with pytest.raises(CatalogError, match="broken.json"):
        event_catalog.load(["{not json"], names=["broken.json"])


def test_empty_catalog_is_rejected():
    with pytest.raises(CatalogError, match="No events"):
        event_catalog.load([{"events": []}])


def test_definitions_are_immutable(catalog):
    with pytest.raises(ValidationError):
        catalog[0].character = "Someone else"


def test_load_directory_reads_json_files_sorted(tmp_path, sample_documents):
    (tmp_path / "b_nobles.json").write_text(json.dumps(sample_documents[1]))
    (tmp_path / "a_commons.json").write_text(json.dumps(sample_documents[0]))
    (tmp_path / "notes.txt").write_text("ignored")

    events = event_catalog.load_directory(tmp_path)

    assert [e.character for e in events][:3] == ["Farmer Hob", "Widow Marta", "Old Tam"]
    assert len(events) == 6


def test_load_directory_reports_bad_file(tmp_path, sample_documents):
    (tmp_path / "good.json").write_text(json.dumps(sample_documents[0]))
    (tmp_path / "bad.json").write_text(json.dumps({"events": [{"character": "x"}]}))

    with pytest.raises(CatalogError, match="bad.json"):
        event_catalog.load_directory(tmp_path)


def test_missing_directory(tmp_path):
    with pytest.raises(CatalogError, match="not found"):
        event_catalog.load_directory(tmp_path / "nope")


def test_bundled_content_loads():
    events = event_catalog.load_default_catalog()

    assert len(events) >= 8
    assert all(event.choices for event in events)
