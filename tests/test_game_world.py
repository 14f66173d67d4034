# ==============================================================================
# Файл: tests/test_game_world.py
# Назначение: Интеграционные тесты фасада игры: обход окрестности,
# сохранение после каждого действия, перезапуск и сброс.
# ==============================================================================
import json
import tempfile
import unittest

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from geocache_engine.core.config import load_config
from geocache_engine.core.types import Cell, LatLng
from geocache_engine.game_logic.world import GameWorld
from geocache_engine.storage.kv_store import JsonFileStore, MemoryStore
from tests.helpers import TableSource

TABLE = {
    "0,0": 0.05, "0,0,initialCoins": 0.6,
    "1,-1": 0.01, "1,-1,initialCoins": 0.2,
    # Клетка за пределами стартового окна
    "2,0": 0.02, "2,0,initialCoins": 0.5,
}


def make_config(**overrides):
    base = {"start_position": [0.00005, 0.00005], "neighborhood_size": 2}
    base.update(overrides)
    return load_config(base)


class TestGameWorld(unittest.TestCase):

    def setUp(self):
        self.kv = MemoryStore()
        self.world = GameWorld(make_config(), self.kv, TableSource(TABLE))

    def saved_payload(self):
        return json.loads(self.kv.get("gameState"))

    def test_start_sweeps_window_and_saves(self):
        caches = self.world.start()
        self.assertEqual(self.world.current_cell, Cell(0, 0))
        self.assertEqual({c.cell: c.coin_count for c in caches},
                         {Cell(0, 0): 30, Cell(1, -1): 10})
        self.assertIsNone(self.world.store.get_cache(Cell(2, 0)))
        keys = [k for k, _ in self.saved_payload()["cacheStates"]]
        self.assertEqual(sorted(keys), ["0:0", "1:-1"])

    def test_collect_and_deposit_write_through(self):
        self.world.start()
        self.assertTrue(self.world.collect(Cell(0, 0)))
        payload = self.saved_payload()
        self.assertEqual(payload["playerCoins"], 1)
        self.assertIn(["0:0", '{"i":0,"j":0,"numCoins":29}'], payload["cacheStates"])

        self.assertTrue(self.world.deposit(Cell(1, -1)))
        payload = self.saved_payload()
        self.assertEqual(payload["playerCoins"], 0)
        self.assertIn(["1:-1", '{"i":1,"j":-1,"numCoins":11}'], payload["cacheStates"])

        self.assertFalse(self.world.deposit(Cell(1, -1)))
        self.assertFalse(self.world.collect(Cell(7, 7)))

    def test_move_appends_path_once_and_sweeps(self):
        self.world.start()
        self.world.move("north")
        self.world.move("north")
        self.assertEqual(len(self.world.player.path), 2)
        self.assertAlmostEqual(self.world.player.position.lat, 0.00025)
        self.assertAlmostEqual(self.world.player.position.lng, 0.00005)
        # Окно сдвинулось на север: клетка (2,0) теперь видна
        self.assertEqual(self.world.current_cell, Cell(2, 0))
        self.assertEqual(self.world.store.get_cache(Cell(2, 0)).coin_count, 25)
        self.assertEqual(len(self.saved_payload()["playerPath"]), 2)

    def test_restart_restores_everything(self):
        self.world.start()
        self.world.collect(Cell(0, 0))
        self.world.collect(Cell(0, 0))
        self.world.move("east")
        total = self.world.total_coins()

        again = GameWorld(make_config(), self.kv, TableSource(TABLE))
        again.start()
        self.assertEqual(again.player.coins, 2)
        self.assertEqual(again.player.path, self.world.player.path)
        self.assertEqual(again.player.position, self.world.player.position)
        self.assertEqual(again.store.get_cache(Cell(0, 0)).coin_count, 28)
        self.assertEqual(again.total_coins(), total)

    def test_memento_beats_procedural_value_after_restart(self):
        self.kv.set("gameState", json.dumps({
            "playerCoins": 5,
            "cacheStates": [["0:0", '{"i":0,"j":0,"numCoins":3}']],
            "playerPath": [],
        }))
        self.world.start()
        self.assertEqual(self.world.store.get_cache(Cell(0, 0)).coin_count, 3)
        self.assertEqual(self.world.player.coins, 5)
        self.assertEqual(self.world.player.position, LatLng(0.00005, 0.00005))

    def test_corrupt_save_starts_fresh(self):
        self.kv.set("gameState", "garbage")
        caches = self.world.start()
        self.assertEqual(self.world.player.coins, 0)
        self.assertEqual(len(caches), 2)

    def test_non_finite_path_in_save_starts_fresh(self):
        self.kv.set("gameState",
                    '{"playerCoins":4,"cacheStates":[],"playerPath":[{"lat":NaN,"lng":0}]}')
        caches = self.world.start()
        self.assertEqual(self.world.player.coins, 0)
        self.assertEqual(self.world.player.position, LatLng(0.00005, 0.00005))
        self.assertEqual(len(caches), 2)
        # Битое сохранение перезаписано свежим состоянием
        self.assertEqual(self.saved_payload()["playerPath"], [])

    def test_reset(self):
        self.world.start()
        self.world.collect(Cell(0, 0))
        self.world.move("north")
        self.world.move("north")

        caches = self.world.reset()
        self.assertEqual(self.world.player.coins, 0)
        self.assertEqual(self.world.player.path, [])
        self.assertEqual(self.world.current_cell, Cell(0, 0))
        self.assertEqual({c.cell: c.coin_count for c in caches},
                         {Cell(0, 0): 30, Cell(1, -1): 10})
        # Клетка (2,0) больше не сохранена
        self.assertIsNone(self.world.store.memento_for(Cell(2, 0)))
        payload = self.saved_payload()
        self.assertEqual(payload["playerCoins"], 0)
        self.assertEqual(payload["playerPath"], [])

    def test_spawn_or_restore_outside_window(self):
        self.world.start()
        cache = self.world.spawn_or_restore(Cell(2, 0))
        self.assertEqual(cache.coin_count, 25)
        self.assertIn("2:0", dict(map(tuple, self.saved_payload()["cacheStates"])))
        self.assertIsNone(self.world.spawn_or_restore(Cell(9, 9)))

    def test_render_state(self):
        self.world.start()
        state = self.world.get_render_state()
        self.assertEqual(state["player_coins"], 0)
        self.assertEqual(state["current_cell"], Cell(0, 0))
        self.assertEqual(len(state["caches"]), 2)
        sw, ne = state["tiles"][Cell(1, -1)]
        self.assertAlmostEqual(sw.lat, 0.0001)
        self.assertAlmostEqual(sw.lng, -0.0001)
        self.assertAlmostEqual(ne.lat, 0.0002)
        self.assertAlmostEqual(ne.lng, 0.0)
        self.assertEqual(state["visited_cells"], [])

        self.world.move("north")
        self.world.move("east")
        state = self.world.get_render_state()
        self.assertEqual(state["visited_cells"], [Cell(1, 0), Cell(1, 1)])
        self.assertEqual(set(state["tiles"]), {c.cell for c in state["caches"]})


class TestGameWorldOnDisk(unittest.TestCase):

    def test_survives_process_restart(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "saves" / "game_state.json"
            config = make_config(save_path=str(path))

            world = GameWorld(config, JsonFileStore(config.save_path), TableSource(TABLE))
            world.start()
            world.collect(Cell(0, 0))

            # Новый процесс: новое хранилище поверх того же файла
            world2 = GameWorld(config, JsonFileStore(config.save_path), TableSource(TABLE))
            world2.start()
            self.assertEqual(world2.player.coins, 1)
            self.assertEqual(world2.store.get_cache(Cell(0, 0)).coin_count, 29)


if __name__ == '__main__':
    unittest.main()
