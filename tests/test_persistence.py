import json

import pytest

from block_blast.game import BlockBlastGame, GameConfig, Piece
from block_blast.persistence import HighScoreStore, score_checksum


@pytest.fixture
def store(tmp_path):
    return HighScoreStore(tmp_path / "scores" / "highscore.json")


def test_missing_file_reads_as_zero(store):
    assert store.load() == 0


def test_save_and_load(store):
    assert store.save(1200) is True
    assert store.load() == 1200
    entry = json.loads(store.path.read_text())
    assert entry == {"score": 1200, "checksum": score_checksum(1200)}


def test_only_better_scores_are_saved(store):
    store.save(500)
    assert store.save(400) is False
    assert store.save(500) is False
    assert store.load() == 500
    assert store.save(501) is True


def test_tampered_entry_is_discarded(store):
    store.save(300)
    entry = json.loads(store.path.read_text())
    entry["score"] = 999999
    store.path.write_text(json.dumps(entry))
    assert store.load() == 0
    assert not store.path.exists()


def test_malformed_file_is_discarded(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("not json")
    assert store.load() == 0
    assert not store.path.exists()


def test_undecodable_file_is_discarded(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_bytes(b"\xff\xfe\x00garbage")
    assert store.load() == 0
    assert not store.path.exists()
    assert store.save(10)
    assert store.load() == 10


def test_unwritable_location_degrades(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    store = HighScoreStore(blocker / "highscore.json")
    assert store.save(100) is False
    assert store.load() == 0


def test_checksum_is_stable_and_score_specific():
    assert score_checksum(1000) == score_checksum(1000)
    assert score_checksum(1000) != score_checksum(1001)
    assert score_checksum(0).isalnum()


def test_records_final_score_from_engine(store, diagonal_board):
    game = BlockBlastGame(GameConfig(random_seed=3), on_game_over=store.record_final_score)
    game.session.tray.slots = [Piece.from_name("line3h"), Piece.from_name("square3"), None]
    game.grid.grid[:] = diagonal_board
    game.grid.grid[0, 3:6] = 0
    outcome = game.place_from_slot(0, 0, 3)
    assert outcome.terminal
    assert store.load() == 30
