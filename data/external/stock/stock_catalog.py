# -*- coding: utf-8 -*-
"""로컬 종목 목록 및 기준가 (외부 API 미설정/실패 시 사용)"""
from dataclasses import dataclass
from typing import Dict, List, Optional

DEFAULT_KRX_BASE_PRICE = 50000
DEFAULT_FOREIGN_BASE_PRICE = 100


@dataclass(frozen=True)
class CatalogStock:
    symbol: str
    name: str
    market: str
    sector: Optional[str] = None
    name_ko: Optional[str] = None


KRX_STOCKS: List[CatalogStock] = [
    CatalogStock('005930', '삼성전자', 'KRX', 'IT'),
    CatalogStock('000660', 'SK하이닉스', 'KRX', 'IT'),
    CatalogStock('035420', 'NAVER', 'KRX', 'IT'),
    CatalogStock('005380', '현대차', 'KRX', '자동차'),
    CatalogStock('051910', 'LG화학', 'KRX', '화학'),
    CatalogStock('006400', '삼성SDI', 'KRX', '화학'),
    CatalogStock('035720', '카카오', 'KRX', 'IT'),
    CatalogStock('028260', '삼성물산', 'KRX', '기타'),
    CatalogStock('105560', 'KB금융', 'KRX', '금융'),
    CatalogStock('055550', '신한지주', 'KRX', '금융'),
    CatalogStock('032830', '삼성생명', 'KRX', '금융'),
    CatalogStock('003670', '포스코홀딩스', 'KRX', '산업재'),
    CatalogStock('034730', 'SK', 'KRX', '에너지'),
    CatalogStock('096770', 'SK이노베이션', 'KRX', '에너지'),
    CatalogStock('207940', '삼성바이오로직스', 'KRX', '바이오'),
    CatalogStock('068270', '셀트리온', 'KRX', '바이오'),
    CatalogStock('028300', 'HLB', 'KRX', '바이오'),
    CatalogStock('017670', 'SK텔레콤', 'KRX', 'IT'),
    CatalogStock('030200', 'KT', 'KRX', 'IT'),
    CatalogStock('018260', '삼성에스디에스', 'KRX', 'IT'),
]

FOREIGN_STOCKS: List[CatalogStock] = [
    CatalogStock('AAPL', 'Apple Inc.', 'NASDAQ', 'IT', '애플'),
    CatalogStock('MSFT', 'Microsoft Corporation', 'NASDAQ', 'IT', '마이크로소프트'),
    CatalogStock('GOOGL', 'Alphabet Inc.', 'NASDAQ', 'IT', '구글'),
    CatalogStock('AMZN', 'Amazon.com Inc.', 'NASDAQ', '소비재', '아마존'),
    CatalogStock('TSLA', 'Tesla, Inc.', 'NASDAQ', '자동차', '테슬라'),
    CatalogStock('META', 'Meta Platforms Inc.', 'NASDAQ', 'IT', '메타'),
    CatalogStock('NVDA', 'NVIDIA Corporation', 'NASDAQ', 'IT', '엔비디아'),
    CatalogStock('JPM', 'JPMorgan Chase & Co.', 'NYSE', '금융', 'JP모건'),
    CatalogStock('V', 'Visa Inc.', 'NYSE', '금융', '비자'),
    CatalogStock('JNJ', 'Johnson & Johnson', 'NYSE', '바이오', '존슨앤존슨'),
    CatalogStock('WMT', 'Walmart Inc.', 'NYSE', '유통', '월마트'),
    CatalogStock('PG', 'Procter & Gamble Co.', 'NYSE', '소비재', 'P&G'),
    CatalogStock('MA', 'Mastercard Inc.', 'NYSE', '금융', '마스터카드'),
    CatalogStock('UNH', 'UnitedHealth Group Inc.', 'NYSE', '의료', '유나이티드헬스'),
    CatalogStock('HD', 'The Home Depot, Inc.', 'NYSE', '소비재', '홈디포'),
    CatalogStock('DIS', 'The Walt Disney Company', 'NYSE', '엔터테인먼트', '월트디즈니'),
    CatalogStock('BAC', 'Bank of America Corp.', 'NYSE', '금융', '뱅크오브아메리카'),
    CatalogStock('XOM', 'Exxon Mobil Corporation', 'NYSE', '에너지', '엑슨모빌'),
    CatalogStock('CVX', 'Chevron Corporation', 'NYSE', '에너지', '셰브론'),
    CatalogStock('NFLX', 'Netflix, Inc.', 'NASDAQ', '엔터테인먼트', '넷플릭스'),
]

# 국내: 원, 해외: 달러
KRX_BASE_PRICES: Dict[str, float] = {
    '005930': 70000,
    '000660': 135000,
    '035420': 220000,
    '005380': 170000,
    '051910': 480000,
    '006400': 550000,
    '035720': 50000,
    '028260': 150000,
    '105560': 60000,
    '055550': 40000,
    '032830': 80000,
    '003670': 400000,
    '034730': 200000,
    '096770': 120000,
    '207940': 800000,
    '068270': 200000,
    '028300': 50000,
    '017670': 50000,
    '030200': 30000,
    '018260': 150000,
}

FOREIGN_BASE_PRICES: Dict[str, float] = {
    'AAPL': 180,
    'MSFT': 380,
    'GOOGL': 140,
    'AMZN': 150,
    'TSLA': 250,
    'META': 350,
    'NVDA': 500,
    'JPM': 150,
    'V': 250,
    'JNJ': 160,
    'WMT': 160,
    'PG': 150,
    'MA': 400,
    'UNH': 500,
    'HD': 350,
    'DIS': 100,
    'BAC': 35,
    'XOM': 110,
    'CVX': 150,
    'NFLX': 450,
}


def find_stock(symbol: str) -> Optional[CatalogStock]:
    for stock in KRX_STOCKS + FOREIGN_STOCKS:
        if stock.symbol == symbol:
            return stock
    return None


def get_base_price(stock: CatalogStock) -> float:
    if stock.market == 'KRX':
        return KRX_BASE_PRICES.get(stock.symbol, DEFAULT_KRX_BASE_PRICE)
    return FOREIGN_BASE_PRICES.get(stock.symbol, DEFAULT_FOREIGN_BASE_PRICE)


def search_catalog(query: str, market: Optional[str] = None) -> List[CatalogStock]:
    """
    로컬 목록 검색 (종목코드, 영문명 대소문자 무시 / 한글명 포함 검색)

    Args:
        query: 검색어
        market: 'KRX' | 'NYSE' | 'NASDAQ' | None
    """
    stocks: List[CatalogStock] = []
    if market in ('KRX', None):
        stocks += KRX_STOCKS
    if market in ('NYSE', 'NASDAQ', None):
        stocks += FOREIGN_STOCKS

    query_lower = query.lower()
    return [
        stock for stock in stocks
        if query_lower in stock.name.lower()
        or query_lower in stock.symbol.lower()
        or (stock.name_ko and query in stock.name_ko)
    ]
