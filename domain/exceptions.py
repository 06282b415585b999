"""Domain Exceptions - 도메인 예외 정의"""


class DuplicateHoldingError(ValueError):
    """이미 보유 중인 종목을 다시 추가하려는 경우"""

    def __init__(self, symbol: str):
        super().__init__(f"이미 보유 중인 종목입니다: {symbol}")
        self.symbol = symbol


class HoldingNotFoundError(KeyError):
    """포트폴리오에 존재하지 않는 종목"""

    def __init__(self, symbol: str):
        super().__init__(symbol)
        self.symbol = symbol

    def __str__(self):
        return f"보유하지 않은 종목입니다: {self.symbol}"


class ImportFormatError(ValueError):
    """가져오기 파일 형식 오류 (헤더 누락, 빈 파일 등)"""


class AuthError(Exception):
    """인증 실패 (로그인 실패, 토큰 검증 실패 등)"""


class ExchangeRateUnavailableError(Exception):
    """모든 환율 제공자에서 환율을 가져오지 못한 경우"""


class SimulationStoppedError(RuntimeError):
    """중지된 시뮬레이션에 step()을 호출한 경우"""
