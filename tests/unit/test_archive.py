"""Tests for archive encoding."""
from __future__ import annotations

import json
from pathlib import Path

import pytest


class TestEncodeDecode:
    """Tests for encode_archive / decode_archive."""

    def test_encode_layout(self) -> None:
        """Keys and objects are stored positionally aligned."""
        from ordmap import OrderedMap
        from ordmap.archive import ARCHIVE_KEY_KEYS, ARCHIVE_KEY_OBJECTS, encode_archive

        m = OrderedMap.from_pairs(["z", "a"], [26, 1])

        assert encode_archive(m) == {ARCHIVE_KEY_KEYS: ["z", "a"], ARCHIVE_KEY_OBJECTS: [26, 1]}
        assert ARCHIVE_KEY_KEYS == "keys"
        assert ARCHIVE_KEY_OBJECTS == "objects"

    def test_decode_preserves_order(self) -> None:
        """Decoding never sorts."""
        from ordmap import MutableOrderedMap, OrderedMap
        from ordmap.archive import decode_archive

        data = {"keys": ["zebra", "alpha", "mango"], "objects": [1, 2, 3]}

        frozen = decode_archive(data)
        mutable = decode_archive(data, mutable=True)

        assert type(frozen) is OrderedMap
        assert type(mutable) is MutableOrderedMap
        assert frozen.all_keys() == ["zebra", "alpha", "mango"]
        assert mutable.equals_ordered(frozen)

    def test_decode_rejects_duplicates(self) -> None:
        """Decoding never deduplicates."""
        from ordmap import ArchiveFormatError
        from ordmap.archive import decode_archive

        with pytest.raises(ArchiveFormatError, match="repeats key 'a'"):
            decode_archive({"keys": ["a", "b", "a"], "objects": [1, 2, 3]})

    def test_decode_rejects_misaligned(self) -> None:
        from ordmap import ArchiveFormatError
        from ordmap.archive import decode_archive

        with pytest.raises(ArchiveFormatError, match="2 keys but 1 values"):
            decode_archive({"keys": ["a", "b"], "objects": [1]})

    @pytest.mark.parametrize(
        "data",
        [
            {"keys": ["a"]},
            {"objects": [1]},
            {"keys": "a", "objects": [1]},
            ["a", 1],
            None,
        ],
    )
    def test_decode_rejects_bad_shape(self, data: object) -> None:
        from ordmap import ArchiveFormatError
        from ordmap.archive import decode_archive

        with pytest.raises(ArchiveFormatError, match="invalid ordered map archive"):
            decode_archive(data)

    def test_decode_rejects_unhashable_keys(self) -> None:
        from ordmap import ArchiveFormatError
        from ordmap.archive import decode_archive

        with pytest.raises(ArchiveFormatError, match="unhashable"):
            decode_archive({"keys": [["a"]], "objects": [1]})

    def test_archive_error_is_value_error(self) -> None:
        from ordmap.archive import decode_archive

        with pytest.raises(ValueError):
            decode_archive({"keys": ["a"]})


class TestJson:
    """Tests for dumps / loads and file helpers."""

    def test_dumps_is_compact(self) -> None:
        from ordmap import OrderedMap
        from ordmap.archive import dumps

        m = OrderedMap.from_pairs(["b", "a"], ["é", None])

        assert dumps(m) == '{"keys":["b","a"],"objects":["é",null]}'

    def test_loads_round_trip(self) -> None:
        from ordmap import OrderedMap
        from ordmap.archive import dumps, loads

        m = OrderedMap.from_pairs(["b", "a", "c"], [{"x": [1, 2]}, True, "s"])

        assert loads(dumps(m)).equals_ordered(m)

    def test_loads_invalid_json(self) -> None:
        from ordmap import ArchiveFormatError
        from ordmap.archive import loads

        with pytest.raises(ArchiveFormatError, match="not valid JSON"):
            loads("{keys:")

    def test_file_round_trip(self, tmp_path: Path) -> None:
        from ordmap import MutableOrderedMap
        from ordmap.archive import read_archive, write_archive

        m = MutableOrderedMap.from_pairs(["k2", "k1"], [2, 1])
        path = tmp_path / "map.json"

        write_archive(m, path)
        restored = read_archive(path, mutable=True)

        assert json.loads(path.read_text(encoding="utf-8")) == {
            "keys": ["k2", "k1"],
            "objects": [2, 1],
        }
        assert type(restored) is MutableOrderedMap
        assert restored.equals_ordered(m)
