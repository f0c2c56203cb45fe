from __future__ import annotations

from collections.abc import Awaitable, Callable

import pytest

from fairdeck_backend.engine.registry import SeedRegistry
from fairdeck_backend.engine.service import FairDealService
from fairdeck_backend.repo.in_memory import InMemoryGameRepository

from .helpers import CLIENT_SEED, FIXED_NOW, SERVER_SEED, commitment_for


@pytest.fixture
def repository() -> InMemoryGameRepository:
    return InMemoryGameRepository()


@pytest.fixture
def registry(repository: InMemoryGameRepository) -> SeedRegistry:
    return SeedRegistry(repository, clock=lambda: FIXED_NOW)


@pytest.fixture
def service(repository: InMemoryGameRepository) -> FairDealService:
    return FairDealService(repository, clock=lambda: FIXED_NOW)


@pytest.fixture
def revealed_game(service: FairDealService) -> Callable[..., Awaitable[str]]:
    async def _create(
        game_id: str = "game-1",
        server_seed: bytes = SERVER_SEED,
        client_seed: bytes = CLIENT_SEED,
    ) -> str:
        await service.commit_server_seed(game_id, commitment_for(server_seed))
        await service.reveal_seeds(game_id, server_seed, client_seed)
        return game_id

    return _create
