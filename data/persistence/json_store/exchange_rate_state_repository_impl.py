"""ExchangeRateState Repository Implementation (key_store JSON)"""
from typing import Optional

from config import key_store
from domain.entities.exchange_rate_state import ExchangeRateState
from domain.repositories.exchange_rate_repository import ExchangeRateStateRepository


class JsonExchangeRateStateRepositoryImpl(ExchangeRateStateRepository):
    """key_store 기반 환율 상태 저장소 ({usdToKrwRate, lastUpdated, isManualRate})"""

    def load(self) -> Optional[ExchangeRateState]:
        data = key_store.read(key_store.EXCHANGE_RATE_STATE)
        if not isinstance(data, dict):
            return None
        try:
            return ExchangeRateState.from_dict(data)
        except (TypeError, ValueError):
            return None

    def save(self, state: ExchangeRateState) -> None:
        key_store.write(key_store.EXCHANGE_RATE_STATE, state.to_dict())
