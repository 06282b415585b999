"""Portfolio Usecase - 보유 종목 관리 및 시세 갱신"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from config.item import DEFAULT_USD_TO_KRW_RATE, USE_SAMPLE_PORTFOLIO
from domain.entities.holding import Holding, is_krx_symbol
from domain.entities.portfolio import Portfolio
from domain.repositories.portfolio_repository import PortfolioRepository
from domain.repositories.stock_repository import StockRepository
from domain.services.exchange_rate_service import ExchangeRateService
from domain.services.valuation import value_holding, value_portfolio
from domain.value_objects.currency import Currency
from domain.value_objects.stock_quote import QuoteSource
from utils.currency_util import convert_krw_to_usd, convert_usd_to_krw

logger = logging.getLogger(__name__)

PortfolioListener = Callable[[Portfolio], None]

# (symbol, name, quantity, avg_price_krw, current_price_krw, sector, tags)
SAMPLE_HOLDINGS = [
    ('005930', '삼성전자', 100, 65000, 70000, 'IT', ['대형주', '배당주']),
    ('000660', 'SK하이닉스', 50, 120000, 135000, 'IT', ['반도체', 'AI']),
    ('035420', 'NAVER', 30, 200000, 220000, 'IT', ['인터넷', 'AI']),
    ('005380', '현대차', 80, 180000, 170000, '자동차', ['자동차', '전기차']),
    ('051910', 'LG화학', 40, 450000, 480000, '화학', ['배터리', 'ESG']),
    ('006400', '삼성SDI', 25, 500000, 550000, '화학', ['배터리', '전기차']),
]


def create_sample_holdings(usd_to_krw_rate: float = DEFAULT_USD_TO_KRW_RATE) -> List[Holding]:
    """예시 포트폴리오 종목 (달러 가격은 원화 가격을 환율로 환산)"""
    return [
        Holding(
            symbol=symbol,
            name=name,
            quantity=quantity,
            avg_price_krw=avg,
            avg_price_usd=convert_krw_to_usd(avg, usd_to_krw_rate),
            current_price_krw=cur,
            current_price_usd=convert_krw_to_usd(cur, usd_to_krw_rate),
            sector=sector,
            tags=tags,
        )
        for symbol, name, quantity, avg, cur, sector, tags in SAMPLE_HOLDINGS
    ]


@dataclass
class PriceRefreshResult:
    """시세 새로고침 결과"""
    updated: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'updated': list(self.updated),
            'failed': list(self.failed),
            'skipped': list(self.skipped),
        }


class PortfolioUsecase:
    """포트폴리오 Usecase"""

    def __init__(
            self,
            portfolio_repo: PortfolioRepository,
            stock_repo: Optional[StockRepository] = None,
            exchange_rate_service: Optional[ExchangeRateService] = None,
            use_sample: bool = USE_SAMPLE_PORTFOLIO,
    ):
        """
        Portfolio Usecase 초기화

        Args:
            portfolio_repo: PortfolioRepository 인터페이스
            stock_repo: StockRepository (시세 새로고침용, Optional)
            exchange_rate_service: ExchangeRateService (통화 환산용, 없으면 기본 환율 1300)
            use_sample: 저장된 포트폴리오가 없을 때 예시 종목으로 시작할지 여부
        """
        self.portfolio_repo = portfolio_repo
        self.stock_repo = stock_repo
        self.exchange_rate_service = exchange_rate_service
        self.use_sample = use_sample
        self._portfolio: Optional[Portfolio] = None
        self._listeners: List[PortfolioListener] = []

    # === 환율 ===

    def get_rate(self) -> float:
        if self.exchange_rate_service is None:
            return DEFAULT_USD_TO_KRW_RATE
        return self.exchange_rate_service.get()

    # === 변경 알림 ===

    def add_listener(self, listener: PortfolioListener) -> None:
        """포트폴리오가 바뀔 때마다 호출될 콜백 등록"""
        self._listeners.append(listener)

    def remove_listener(self, listener: PortfolioListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _commit(self, portfolio: Portfolio) -> None:
        self.portfolio_repo.save(portfolio)
        for listener in list(self._listeners):
            listener(portfolio)

    # === 조회 ===

    def get_portfolio(self) -> Portfolio:
        """
        현재 포트폴리오 조회 (최초 1회 저장소에서 로드)

        저장된 포트폴리오가 없으면 use_sample 설정에 따라 예시 또는 빈 포트폴리오를 만들어 저장합니다.
        """
        if self._portfolio is None:
            portfolio = self.portfolio_repo.load()
            if portfolio is None:
                holdings = create_sample_holdings(self.get_rate()) if self.use_sample else []
                portfolio = Portfolio(holdings=holdings)
                self.portfolio_repo.save(portfolio)
                logger.info(f"새 포트폴리오 생성 (예시 종목 {len(holdings)}개)")
            self._portfolio = portfolio
        return self._portfolio

    def get_holdings(self) -> List[Holding]:
        return self.get_portfolio().holdings

    def get_summary(self) -> dict:
        """
        포트폴리오 요약 (종목별 평가 + 합계)

        Returns:
            Dict: {
                "portfolio": {...},
                "holdings": [{...holding, "valueKrw", "valueUsd", "profitLossKrw", ...}],
                "summary": {"valueKrw", "valueUsd", "profitLossKrw", "profitLossUsd", "profitLossRate", "count"},
                "usdToKrwRate": 1350.5
            }
        """
        portfolio = self.get_portfolio()
        rate = self.get_rate()

        holdings = []
        for holding in portfolio.holdings:
            valuation = value_holding(holding, rate)
            data = holding.to_dict()
            data.update({
                'valueKrw': valuation.value_krw,
                'valueUsd': valuation.value_usd,
                'profitLossKrw': valuation.profit_loss_krw,
                'profitLossUsd': valuation.profit_loss_usd,
                'profitLossRate': valuation.profit_loss_rate,
            })
            holdings.append(data)

        summary = value_portfolio(portfolio, rate)
        return {
            'portfolio': portfolio.to_dict(),
            'holdings': holdings,
            'summary': {
                'valueKrw': summary.value_krw,
                'valueUsd': summary.value_usd,
                'profitLossKrw': summary.profit_loss_krw,
                'profitLossUsd': summary.profit_loss_usd,
                'profitLossRate': summary.profit_loss_rate,
                'count': summary.count,
            },
            'usdToKrwRate': rate,
        }

    # === 가격 입력 변환 ===

    def _dual_prices(self, price: float, currency: Currency) -> tuple:
        """단일 통화 가격 → (원화, 달러)"""
        rate = self.get_rate()
        if currency == Currency.USD:
            return convert_usd_to_krw(price, rate), round(float(price), 2)
        krw = convert_usd_to_krw(price, 1.0)  # 원 단위 반올림
        return krw, convert_krw_to_usd(krw, rate)

    def build_holding(
            self,
            symbol: str,
            name: str,
            quantity: float,
            avg_price_krw: Optional[float] = None,
            avg_price_usd: Optional[float] = None,
            current_price_krw: Optional[float] = None,
            current_price_usd: Optional[float] = None,
            avg_price: Optional[float] = None,
            current_price: Optional[float] = None,
            currency: Optional[str] = None,
            sector: Optional[str] = None,
            tags: Optional[List[str]] = None,
    ) -> Holding:
        """
        입력값으로 Holding 생성

        원화/달러 가격을 모두 주면 그대로 사용하고, avg_price/current_price만 주면
        currency(없으면 종목코드로 판단한 시장 통화) 기준으로 현재 환율을 적용해 반대 통화를 채웁니다.

        Raises:
            ValueError: 가격 정보가 부족하거나 값이 유효하지 않은 경우
        """
        explicit = (avg_price_krw, avg_price_usd, current_price_krw, current_price_usd)
        if all(v is not None for v in explicit):
            prices = tuple(float(v) for v in explicit)
        elif avg_price is not None and current_price is not None:
            if currency:
                unit = Currency.parse(currency)
            else:
                unit = Currency.KRW if is_krx_symbol((symbol or '').strip()) else Currency.USD
            avg_krw, avg_usd = self._dual_prices(float(avg_price), unit)
            cur_krw, cur_usd = self._dual_prices(float(current_price), unit)
            prices = (avg_krw, avg_usd, cur_krw, cur_usd)
        else:
            raise ValueError("평균매수가와 현재가를 입력해주세요")

        return Holding(
            symbol=symbol,
            name=name,
            quantity=quantity,
            avg_price_krw=prices[0],
            avg_price_usd=prices[1],
            current_price_krw=prices[2],
            current_price_usd=prices[3],
            sector=sector,
            tags=tags,
        )

    # === 변경 ===

    def add_holding(self, **fields) -> Holding:
        """
        종목 추가 (build_holding 인자와 동일)

        Raises:
            ValueError: 입력값 오류
            DuplicateHoldingError: 이미 보유 중인 종목
        """
        holding = self.build_holding(**fields)
        portfolio = self.get_portfolio()
        portfolio.add_holding(holding)
        self._commit(portfolio)
        logger.info(f"종목 추가: {holding.symbol} {holding.name} x{holding.quantity}")
        return holding

    def update_holding(self, symbol: str, **changes) -> Holding:
        """
        종목 부분 수정

        Raises:
            HoldingNotFoundError: 보유하지 않은 종목
            DuplicateHoldingError: 다른 보유 종목 코드로 변경
            ValueError: 입력값 오류
        """
        portfolio = self.get_portfolio()
        updated = portfolio.update_holding(symbol, **changes)
        self._commit(portfolio)
        return updated

    def remove_holding(self, symbol: str) -> Holding:
        portfolio = self.get_portfolio()
        removed = portfolio.remove_holding(symbol)
        self._commit(portfolio)
        logger.info(f"종목 삭제: {symbol}")
        return removed

    def replace_holdings(self, holdings: List[Holding]) -> Portfolio:
        """전체 종목 교체 (덮어쓰기 가져오기)"""
        portfolio = self.get_portfolio()
        portfolio.set_holdings(holdings)
        self._commit(portfolio)
        return portfolio

    def merge_holdings(self, holdings: List[Holding]) -> List[Holding]:
        """새 종목만 추가 (병합 가져오기)"""
        portfolio = self.get_portfolio()
        added = portfolio.merge_holdings(holdings)
        self._commit(portfolio)
        return added

    def clear(self) -> None:
        portfolio = self.get_portfolio()
        portfolio.clear()
        self._commit(portfolio)

    # === 시세 ===

    def refresh_prices(self) -> PriceRefreshResult:
        """
        보유 종목 현재가 새로고침

        실시세(KIS/AlphaVantage)만 반영하며 로컬 기준가는 건너뜁니다.
        조회에 실패한 종목은 마지막 가격을 유지하고 failed에 기록됩니다.

        Returns:
            PriceRefreshResult
        """
        result = PriceRefreshResult()
        portfolio = self.get_portfolio()
        if self.stock_repo is None or not portfolio.holdings:
            return result

        rate = self.get_rate()
        quotes = self.stock_repo.get_batch_prices(portfolio.symbols)
        for symbol in portfolio.symbols:
            quote = quotes.get(symbol)
            if quote is None or quote.current_price <= 0:
                result.failed.append(symbol)
                continue
            if quote.source == QuoteSource.LOCAL:
                result.skipped.append(symbol)
                continue

            if Currency.parse(quote.currency) == Currency.USD:
                price_krw = convert_usd_to_krw(quote.current_price, rate)
                price_usd = round(quote.current_price, 2)
            else:
                price_krw = quote.current_price
                price_usd = convert_krw_to_usd(quote.current_price, rate)

            portfolio.update_price(symbol, price_krw, price_usd, quote.change_rate)
            result.updated.append(symbol)

        if result.updated:
            self._commit(portfolio)
        logger.info(f"시세 갱신: 성공 {len(result.updated)}, 실패 {len(result.failed)}, 건너뜀 {len(result.skipped)}")
        return result
