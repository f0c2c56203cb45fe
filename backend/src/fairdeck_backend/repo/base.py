from __future__ import annotations

from abc import ABC, abstractmethod

from fairdeck_backend.engine.internal import GameRecord


class GameRepository(ABC):
    @abstractmethod
    def get(self, game_id: str) -> GameRecord:
        raise NotImplementedError

    @abstractmethod
    def get_or_create(self, game_id: str) -> GameRecord:
        raise NotImplementedError

    @abstractmethod
    def all(self) -> list[GameRecord]:
        raise NotImplementedError
