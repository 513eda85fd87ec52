"""High-score entries and the persistent leaderboard."""

from __future__ import annotations

import logging
import os
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from .constants import (
    BOARD_PIXELS,
    HUD_TEXT_COLOR,
    MENU_BG_COLOR,
    MENU_TEXT_COLOR,
)
from .render import Canvas

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Score:
    """One leaderboard entry: a player name of at most 31 bytes and a score."""

    name: str = ""
    score: int = 0

    NAME_LENGTH: ClassVar[int] = 32
    _RECORD: ClassVar[struct.Struct] = struct.Struct(f"<{32}si")
    SIZE: ClassVar[int] = _RECORD.size

    def __post_init__(self) -> None:
        raw = self.name.encode("utf-8")[: self.NAME_LENGTH - 1]
        object.__setattr__(self, "name", raw.decode("utf-8", errors="ignore"))

    def to_bytes(self) -> bytes:
        """Encode as a fixed-size record: a NUL-padded name and a 32-bit score."""
        return self._RECORD.pack(self.name.encode("utf-8"), self.score)

    @classmethod
    def from_bytes(cls, data: bytes) -> Score:
        """Decode a record produced by to_bytes."""
        if len(data) != cls.SIZE:
            raise ValueError(f"a score record is {cls.SIZE} bytes, got {len(data)}")
        raw_name, score = cls._RECORD.unpack(data)
        name = raw_name.split(b"\0", 1)[0].decode("utf-8", errors="ignore")
        return cls(name, score)


class Leaderboard:
    """The top ten scores, kept in a binary file."""

    MAX_ENTRIES: ClassVar[int] = 10

    def __init__(self, filename: str | os.PathLike[str] = "highscores.dat") -> None:
        self.filename = Path(filename)
        self.high_scores: list[Score] = []
        self.load_high_scores()

    def load_high_scores(self) -> None:
        """Read the scores from the file, or fill in defaults when it cannot be read."""
        try:
            data = self.filename.read_bytes()
        except OSError:
            self.high_scores = [Score("Player", 0) for _ in range(self.MAX_ENTRIES)]
            return
        data = data[: self.MAX_ENTRIES * Score.SIZE]
        scores = [
            Score.from_bytes(data[start : start + Score.SIZE])
            for start in range(0, len(data) - Score.SIZE + 1, Score.SIZE)
        ]
        scores.extend(Score() for _ in range(self.MAX_ENTRIES - len(scores)))
        self.high_scores = scores

    def save_high_scores(self) -> None:
        """Write all entries to the file; raises OSError when it cannot be written."""
        self.filename.write_bytes(b"".join(entry.to_bytes() for entry in self.high_scores))

    def add_score(self, name: str, score: int) -> bool:
        """Insert a score in rank order and save; return whether it made the table."""
        if not self.is_high_score(score):
            return False
        index = self.MAX_ENTRIES - 1
        while index > 0 and score > self.high_scores[index - 1].score:
            index -= 1
        self.high_scores.insert(index, Score(name, score))
        del self.high_scores[self.MAX_ENTRIES :]
        try:
            self.save_high_scores()
        except OSError as exc:
            log.warning("could not save high scores to %s: %s", self.filename, exc)
        return True

    def is_high_score(self, score: int) -> bool:
        """Return whether the score beats the lowest entry."""
        return score > self.high_scores[-1].score

    def _entry_lines(self) -> list[str]:
        return [
            f"{rank}. {entry.name} - {entry.score}"
            for rank, entry in enumerate(self.high_scores, start=1)
        ]

    def display(self, canvas: Canvas) -> None:
        """Draw the table in the middle of the board."""
        centre = BOARD_PIXELS // 2
        canvas.draw_rectangle(centre - 150, centre - 200, 300, 400, MENU_BG_COLOR)
        canvas.draw_string(centre - 80, centre - 150, "HIGH SCORES", MENU_TEXT_COLOR)
        for row, line in enumerate(self._entry_lines()):
            canvas.draw_string(centre - 140, centre - 100 + row * 30, line, HUD_TEXT_COLOR)