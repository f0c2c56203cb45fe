from __future__ import annotations

from fairdeck_backend.engine.service import FairDealService
from fairdeck_backend.repo.in_memory import InMemoryGameRepository


repository = InMemoryGameRepository()
deal_service = FairDealService(repository)
