from __future__ import annotations

from fairdeck_backend.engine.internal import GameRecord
from fairdeck_backend.repo.base import GameRepository


class InMemoryGameRepository(GameRepository):
    def __init__(self) -> None:
        self._games: dict[str, GameRecord] = {}

    def get(self, game_id: str) -> GameRecord:
        if game_id not in self._games:
            raise KeyError(f"game {game_id} not found")
        return self._games[game_id]

    def get_or_create(self, game_id: str) -> GameRecord:
        if game_id not in self._games:
            self._games[game_id] = GameRecord(game_id=game_id)
        return self._games[game_id]

    def all(self) -> list[GameRecord]:
        return list(self._games.values())
