"""Bookmark Codec — JSON blobs for the bookmark list and name map.

Tests cover:
    - Round-trip of lists (order preserved) and maps
    - Load-time normalization, empty skipping, first-seen dedup
    - Names parsed without validation against bookmarks
    - Malformed blobs raise ValueError
"""

import json

import pytest

from geobookmarks.core.bookmark_codec import (
    decode_bookmarks, decode_names, encode_bookmarks, encode_names,
)


def test_bookmarks_round_trip_preserves_order():
    bookmarks = ["u4prez", "9q", "dr5reg", "b"]
    assert decode_bookmarks(encode_bookmarks(bookmarks)) == bookmarks


def test_names_round_trip():
    names = {"u4prez": "Mission District", "9q": "California and Nevada", "xn": "東京都"}
    assert decode_names(encode_names(names)) == names


def test_encoded_bookmarks_are_a_json_array():
    assert json.loads(encode_bookmarks(["9q", "u4"])) == ["9q", "u4"]


def test_non_ascii_names_stored_unescaped():
    assert "東京都" in encode_names({"xn": "東京都"})


def test_decode_normalizes_dedups_and_skips_empty():
    blob = json.dumps(["#U4PR", "u4pr", "", "aio", " 9Q ", 42, "9q"])
    assert decode_bookmarks(blob) == ["u4pr", "9q"]


def test_decode_names_keeps_entries_for_unknown_keys():
    assert decode_names('{"zzz": "Old Town"}') == {"zzz": "Old Town"}


def test_decode_names_drops_empty_and_non_string_values():
    assert decode_names('{"a1": "", "b2": null, "c3": 4, "d4": "Ok"}') == {"d4": "Ok"}


@pytest.mark.parametrize("blob", ['{"a": 1}', '"u4pr"', "not json"])
def test_malformed_bookmarks_blob_raises(blob):
    with pytest.raises(ValueError):
        decode_bookmarks(blob)


@pytest.mark.parametrize("blob", ["[]", "42", "{broken"])
def test_malformed_names_blob_raises(blob):
    with pytest.raises(ValueError):
        decode_names(blob)
