import pytest

from consoletris.instance import GameInstance


class CountingGame(GameInstance):
    def __init__(self, limit):
        super().__init__()
        self.limit = limit
        self.calls = 0

    def game_loop(self):
        self.calls += 1
        if self.calls >= self.limit:
            GameInstance.stop(self)


def test_start_runs_loop_until_stopped():
    game = CountingGame(limit=3)
    GameInstance.start(game)
    assert game.calls == 3
    assert game.is_running is False


def test_stop_inside_first_loop_runs_once():
    game = CountingGame(limit=1)
    GameInstance.start(game)
    assert game.calls == 1
    assert game.is_running is False


def test_new_instance_is_not_running_until_started():
    game = CountingGame(limit=2)
    assert game.is_running is False
    assert game.calls == 0
    GameInstance.start(game)
    assert game.calls == 2


def test_start_again_after_stop_runs_loop_again():
    game = CountingGame(limit=2)
    GameInstance.start(game)
    assert game.calls == 2
    game.limit = 4
    GameInstance.start(game)
    assert game.calls == 4
    assert game.is_running is False


def test_game_loop_is_abstract():
    with pytest.raises(TypeError):
        GameInstance()