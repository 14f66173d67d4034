# ==============================================================================
# Файл: tests/test_serialization.py
# Назначение: Юнит-тесты формата мементо и снапшота.
# ==============================================================================
import json
import unittest

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from geocache_engine.core.errors import SnapshotError
from geocache_engine.core.types import Cache, Cell, LatLng
from geocache_engine.world.serialization import Snapshot, decode_memento, encode_memento


class TestMemento(unittest.TestCase):

    def test_encode_is_compact(self):
        self.assertEqual(encode_memento(Cache(Cell(-3, 12), 4)), '{"i":-3,"j":12,"numCoins":4}')

    def test_decode(self):
        cache = decode_memento('{"i": 2, "j": -1, "numCoins": 17}')
        self.assertEqual(cache.cell, Cell(2, -1))
        self.assertEqual(cache.coin_count, 17)

    def test_decode_rejects_garbage(self):
        for bad in ['nope', '[]', '{"i":1,"j":2}', '{"i":1,"j":2,"numCoins":-1}',
                    '{"i":1.5,"j":2,"numCoins":1}', '{"i":1,"j":2,"numCoins":true}']:
            with self.assertRaises(SnapshotError, msg=bad):
                decode_memento(bad)


class TestSnapshot(unittest.TestCase):

    def test_payload_layout(self):
        snap = Snapshot(
            player_coins=3,
            cache_states={"0:0": '{"i":0,"j":0,"numCoins":29}'},
            player_path=[LatLng(1.0, 2.0)],
        )
        self.assertEqual(snap.to_payload(), {
            "version": 1,
            "playerCoins": 3,
            "cacheStates": [["0:0", '{"i":0,"j":0,"numCoins":29}']],
            "playerPath": [{"lat": 1.0, "lng": 2.0}],
        })

    def test_parse_keeps_memento_order(self):
        text = json.dumps({
            "version": 1,
            "playerCoins": 2,
            "cacheStates": [
                ["5:1", '{"i":5,"j":1,"numCoins":0}'],
                ["-2:3", '{"i":-2,"j":3,"numCoins":8}'],
            ],
            "playerPath": [{"lat": 0.5, "lng": -0.5}, {"lat": 0.6, "lng": -0.5}],
        })
        snap = Snapshot.from_json(text)
        self.assertEqual(list(snap.cache_states), ["5:1", "-2:3"])
        self.assertEqual(snap.player_coins, 2)
        self.assertEqual(snap.player_path[-1], LatLng(0.6, -0.5))

    def test_payload_without_version_is_accepted(self):
        text = json.dumps({"playerCoins": 4, "cacheStates": [], "playerPath": []})
        snap = Snapshot.from_json(text)
        self.assertEqual(snap.player_coins, 4)
        self.assertEqual(snap.version, 1)

    def test_empty_object_is_empty_state(self):
        snap = Snapshot.from_json("{}")
        self.assertEqual(snap.player_coins, 0)
        self.assertEqual(snap.cache_states, {})
        self.assertEqual(snap.player_path, [])

    def test_invalid_payloads(self):
        bad_payloads = [
            "not json",
            "[]",
            json.dumps({"version": 99}),
            json.dumps({"playerCoins": -1}),
            json.dumps({"playerCoins": "3"}),
            json.dumps({"cacheStates": 5}),
            json.dumps({"cacheStates": [["0:0"]]}),
            json.dumps({"cacheStates": [["1:1", '{"i":0,"j":0,"numCoins":1}']]}),
            json.dumps({"playerPath": [{"lat": 1.0}]}),
            json.dumps({"playerPath": "x"}),
            '{"playerPath":[{"lat":NaN,"lng":0}]}',
            '{"playerPath":[{"lat":0,"lng":Infinity}]}',
            '{"playerPath":[{"lat":-Infinity,"lng":0}]}',
        ]
        for text in bad_payloads:
            with self.assertRaises(SnapshotError, msg=text):
                Snapshot.from_json(text)


if __name__ == '__main__':
    unittest.main()
