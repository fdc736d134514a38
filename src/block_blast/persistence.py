"""Best-score storage.

The stored entry carries a checksum so that a hand-edited file is rejected.
The checksum is a djb2-style string hash with a fixed salt: it deters casual
editing only and is NOT cryptographic. Anyone who reads this module can forge
an entry.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

_SALT = "BlockBlast2024"
DEFAULT_PATH = Path.home() / ".block_blast" / "highscore.json"


def score_checksum(score: int) -> str:
    data = f"{_SALT}:{int(score)}:{_SALT[::-1]}"
    h = 5381
    for ch in data:
        h = (((h << 5) + h) ^ ord(ch)) & 0xFFFFFFFF
    return _base36(h)


def _base36(value: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(digits[rem])
    return "".join(reversed(out))


class HighScoreStore:
    """Keeps the best score in a small JSON file.

    Every failure to read or write degrades to "no stored score" so the game
    itself is never affected.
    """

    def __init__(self, path: Union[str, os.PathLike, None] = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_PATH

    def load(self) -> int:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return 0
        except OSError as exc:
            logger.warning("Could not read high score from %s: %s", self.path, exc)
            return 0
        try:
            entry = json.loads(raw.decode("utf-8"))
            score = int(entry["score"])
            checksum = str(entry["checksum"])
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding malformed high score file %s", self.path)
            self._discard()
            return 0
        if score < 0 or checksum != score_checksum(score):
            logger.warning("Discarding high score with bad checksum in %s", self.path)
            self._discard()
            return 0
        return score

    def save(self, score: int) -> bool:
        """Store ``score`` if it beats the stored best. Returns True if it did."""
        score = int(score)
        if score <= self.load():
            return False
        entry = {"score": score, "checksum": score_checksum(score)}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(entry), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not write high score to %s: %s", self.path, exc)
            return False
        logger.info("New high score %d saved to %s", score, self.path)
        return True

    def record_final_score(self, score: int) -> None:
        self.save(score)

    def _discard(self) -> None:
        try:
            self.path.unlink()
        except OSError:
            logger.debug("Could not remove %s", self.path)
