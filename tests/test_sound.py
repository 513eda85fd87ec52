import subprocess
from unittest import mock

from rushhour.sound import play_sound


def test_play_sound_invokes_player_with_file():
    completed = subprocess.CompletedProcess(args=[], returncode=0)
    with mock.patch("rushhour.sound.subprocess.run", return_value=completed) as run:
        assert play_sound("dropped.wav") is True
    args = run.call_args.args[0]
    assert args == ["aplay", "-q", "dropped.wav"]


def test_play_sound_reports_failure_code():
    completed = subprocess.CompletedProcess(args=[], returncode=1)
    with mock.patch("rushhour.sound.subprocess.run", return_value=completed):
        assert play_sound("collision.wav") is False


def test_play_sound_missing_player():
    with mock.patch("rushhour.sound.subprocess.run", side_effect=FileNotFoundError):
        assert play_sound("gameover.wav") is False