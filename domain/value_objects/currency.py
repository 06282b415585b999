"""Currency / Market Value Object"""
from enum import Enum


class Currency(Enum):
    """통화"""
    KRW = 'KRW'
    USD = 'USD'

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, value) -> 'Currency':
        """대소문자 무관 변환, 알 수 없는 값은 KRW"""
        if isinstance(value, Currency):
            return value
        if value and str(value).strip().upper() == 'USD':
            return cls.USD
        return cls.KRW


class Market(Enum):
    """거래 시장"""
    KRX = 'KRX'
    NYSE = 'NYSE'
    NASDAQ = 'NASDAQ'

    def __str__(self):
        return self.value

    @property
    def currency(self) -> Currency:
        return Currency.KRW if self == Market.KRX else Currency.USD

    @property
    def is_foreign(self) -> bool:
        return self != Market.KRX
