"""Playing sound effects through an external command-line player."""

from __future__ import annotations

import subprocess

SOUND_COMMAND: tuple[str, ...] = ("aplay", "-q")


def play_sound(filename: str) -> bool:
    """Play a sound file and wait for it; return whether the player succeeded."""
    try:
        result = subprocess.run([*SOUND_COMMAND, filename], check=False)
    except OSError:
        return False
    return result.returncode == 0