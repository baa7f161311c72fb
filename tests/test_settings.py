"""
Test script for persistent settings and board generators

Usage:
    python -m pytest tests/test_settings.py
"""

import json
import sys
import random
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from orbdrag.generators import FIXED_LAYOUT, fixed_board, random_board
from orbdrag.settings import DEFAULT_SETTINGS, config_from_settings, load_settings, save_settings
from orbdrag.solver import Axis, Priority, SolverConfig
from orbdrag.solver.board import piece_of, restriction_of, designation_of


def test_load_defaults(tmp_path):
    """Missing or broken files fall back to defaults."""
    print("\n" + "="*60)
    print("TEST: Settings Defaults")
    print("="*60)

    missing = tmp_path / "missing.json"
    assert load_settings(missing) == DEFAULT_SETTINGS

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert load_settings(broken) == DEFAULT_SETTINGS

    wrong_root = tmp_path / "list.json"
    wrong_root.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_settings(wrong_root) == DEFAULT_SETTINGS

    # Returned dicts are copies
    settings = load_settings(missing)
    settings["beam_width"] = 1
    assert DEFAULT_SETTINGS["beam_width"] == SolverConfig().beam_width

    print("  [PASS] Settings default tests")


def test_save_and_load(tmp_path):
    """Saved settings round-trip and merge over defaults."""
    print("\n" + "="*60)
    print("TEST: Settings Save/Load")
    print("="*60)

    path = tmp_path / "config.json"
    save_settings({"axis": "vertical", "beam_width": 64, "target": 4}, path)
    print(f"  Saved: {path.read_text(encoding='utf-8')}")
    assert json.loads(path.read_text(encoding="utf-8"))["beam_width"] == 64

    loaded = load_settings(path)
    assert loaded["axis"] == "vertical"
    assert loaded["beam_width"] == 64
    assert loaded["target"] == 4
    assert loaded["max_steps"] == DEFAULT_SETTINGS["max_steps"]

    config = config_from_settings(loaded)
    assert config.axis is Axis.VERTICAL
    assert config.beam_width == 64
    assert config.priority is Priority.MAX_CLUSTERS

    print("  [PASS] Settings save/load tests")


def test_invalid_solver_settings():
    """Invalid solver values fall back to the default config."""
    print("\n" + "="*60)
    print("TEST: Invalid Solver Settings")
    print("="*60)

    assert config_from_settings({"beam_width": 0}) == SolverConfig()
    assert config_from_settings({"priority": "fastest"}) == SolverConfig()
    assert config_from_settings({"debug_enabled": True}) == SolverConfig()

    print("  [PASS] Invalid solver settings tests")


def test_generators():
    """Fixed and random layouts are mark-free and well-formed."""
    print("\n" + "="*60)
    print("TEST: Board Generators")
    print("="*60)

    board = fixed_board()
    assert board.grid == FIXED_LAYOUT

    assert random_board(seed=7) == random_board(seed=7)
    assert random_board(rng=random.Random(7)) == random_board(seed=7)

    for seed in range(10):
        for code in random_board(seed).to_codes():
            assert 0 <= piece_of(code) < 6
            assert restriction_of(code) == 0
            assert designation_of(code) == 0

    print("  [PASS] Board generator tests")
