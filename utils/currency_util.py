"""
통화 변환/표시 유틸리티

환율은 항상 인자로 전달받습니다 (ExchangeRateService.get() 값).
"""
import math

from config.item import DEFAULT_USD_TO_KRW_RATE
from domain.value_objects.currency import Currency


def _check_rate(rate: float) -> float:
    if rate is None or rate <= 0:
        raise ValueError(f"환율은 0보다 커야 합니다: {rate}")
    return rate


def convert_usd_to_krw(amount: float, rate: float = DEFAULT_USD_TO_KRW_RATE) -> float:
    """달러 → 원화 (원 단위 반올림)"""
    return float(math.floor(amount * _check_rate(rate) + 0.5))


def convert_krw_to_usd(amount: float, rate: float = DEFAULT_USD_TO_KRW_RATE) -> float:
    """원화 → 달러 (센트 단위 반올림)"""
    return round(amount / _check_rate(rate), 2)


def convert_to_krw(amount: float, currency, rate: float = DEFAULT_USD_TO_KRW_RATE) -> float:
    if Currency.parse(currency) == Currency.KRW:
        return amount
    return amount * _check_rate(rate)


def convert_from_krw(amount: float, currency, rate: float = DEFAULT_USD_TO_KRW_RATE) -> float:
    if Currency.parse(currency) == Currency.KRW:
        return amount
    return amount / _check_rate(rate)


def get_currency_symbol(currency) -> str:
    return '원' if Currency.parse(currency) == Currency.KRW else '$'


def get_currency_name(currency) -> str:
    return '원화' if Currency.parse(currency) == Currency.KRW else '달러'


def format_currency(amount: float, currency, show_symbol: bool = True) -> str:
    """
    통화 표시 문자열

    Examples:
        format_currency(1234567, 'KRW') -> '1,234,567원'
        format_currency(1234.5, 'USD') -> '$1,234.50'
    """
    symbol = get_currency_symbol(currency) if show_symbol else ''
    if Currency.parse(currency) == Currency.KRW:
        return f"{round(amount):,}{symbol}"
    return f"{symbol}{amount:,.2f}"
