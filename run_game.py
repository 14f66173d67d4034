# Файл: run_game.py
from __future__ import annotations
import argparse
import logging
import sys
import pathlib

ROOT = pathlib.Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from geocache_engine.core.config import load_config
from geocache_engine.core.constants import DIR_EAST, DIR_NORTH, DIR_SOUTH, DIR_WEST
from geocache_engine.core.errors import ConfigError
from geocache_engine.core.types import Cell
from geocache_engine.game_logic.world import GameWorld
from geocache_engine.setup_logging import setup_logging
from geocache_engine.storage.kv_store import JsonFileStore

MOVES = {"n": DIR_NORTH, "s": DIR_SOUTH, "e": DIR_EAST, "w": DIR_WEST}

HELP = """Commands:
  n / s / e / w    move one step
  look             list caches around the player
  c <i> <j>        collect a coin from cache (i, j)
  d <i> <j>        deposit a coin into cache (i, j)
  coins <i> <j>    list the coins held by cache (i, j)
  save | load      write / read the saved game
  reset            erase all progress
  q                quit"""


def print_status(world: GameWorld) -> None:
    state = world.get_render_state()
    coins = state["player_coins"]
    pos = state["player_position"]
    cell = state["current_cell"]
    print(f"Player Coins: {coins}" if coins else "No coins :(")
    print(f"Position: {pos.lat:.5f}, {pos.lng:.5f}  cell ({cell.i}, {cell.j})")
    print(f"Cells visited: {len(set(state['visited_cells']))}")


def print_caches(world: GameWorld, caches) -> None:
    if not caches:
        print("No caches nearby.")
        return
    tiles = world.get_render_state()["tiles"]
    for cache in caches:
        sw, ne = tiles[cache.cell]
        print(f'  Cache at "{cache.cell.i},{cache.cell.j}" - Coins: {cache.coin_count}'
              f"  [{sw.lat:.4f}, {sw.lng:.4f} .. {ne.lat:.4f}, {ne.lng:.4f}]")


def parse_cell(args) -> Cell | None:
    if len(args) != 2:
        print("Usage: c|d|coins <i> <j>")
        return None
    try:
        return Cell(int(args[0]), int(args[1]))
    except ValueError:
        print("Cell coordinates must be integers.")
        return None


def main(argv=None):
    parser = argparse.ArgumentParser(description="Collect Coins! (console)")
    parser.add_argument("--config", help="path to a JSON config file")
    parser.add_argument("--save", help="override the save file path")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, log_file=None)

    try:
        overrides = {"save_path": args.save} if args.save else None
        config = load_config(args.config, overrides)
    except ConfigError as e:
        print(f"Config error: {e}")
        return 1

    world = GameWorld(config, JsonFileStore(config.save_path))
    caches = world.start()
    print("--- Collect Coins! ---")
    print(HELP)
    print_status(world)

    while True:
        try:
            line = input(">>> ").strip()
        except EOFError:
            break
        if not line:
            continue
        cmd, *rest = line.split()
        cmd = cmd.lower()

        if cmd == "q":
            break
        elif cmd in MOVES:
            caches = world.move(MOVES[cmd])
            print_status(world)
        elif cmd == "look":
            print_caches(world, caches)
        elif cmd in ("c", "d"):
            cell = parse_cell(rest)
            if cell is None:
                continue
            ok = world.collect(cell) if cmd == "c" else world.deposit(cell)
            if not ok:
                print("Nothing happened.")
            print_status(world)
        elif cmd == "coins":
            cell = parse_cell(rest)
            if cell is None:
                continue
            cache = world.store.get_cache(cell)
            if cache is None:
                print("No cache there.")
            else:
                print("  " + (", ".join(str(c) for c in cache.coin_ids()) or "(empty)"))
        elif cmd == "save":
            world.save()
            print("Game saved.")
        elif cmd == "load":
            if world.load() is None:
                print("No saved game found.")
            caches = world.refresh_neighborhood()
            print_status(world)
        elif cmd == "reset":
            answer = input("Are you sure you want to reset the game? "
                           "This will erase all progress and cannot be undone. [y/N] ")
            if answer.strip().lower() == "y":
                caches = world.reset()
                print_status(world)
        else:
            print(HELP)

    world.save()
    return 0


if __name__ == "__main__":
    sys.exit(main())
