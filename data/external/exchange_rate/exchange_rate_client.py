# -*- coding: utf-8 -*-
"""USD/KRW 환율 제공자 클라이언트 (exchangerate-api, 네이버 금융, yfinance)"""
import logging
from typing import Optional

import requests
import yfinance as yf
from bs4 import BeautifulSoup

from config.item import REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

EXCHANGE_RATE_API_URL = 'https://api.exchangerate-api.com/v4/latest/USD'
NAVER_MARKET_INDEX_URL = 'https://finance.naver.com/marketindex/'
YF_USD_KRW_TICKER = 'KRW=X'


class ExchangeRateClient:
    """
    환율 제공자별 조회

    각 메서드는 실패 시 예외 대신 None을 반환하며, 원인은 로그로 남깁니다.
    """

    def __init__(self, timeout: float = REQUEST_TIMEOUT):
        self.timeout = timeout

    def fetch_from_exchangerate_api(self) -> Optional[float]:
        """
        exchangerate-api.com (API 키 불필요)

        Returns:
            float: rates.KRW, 실패 시 None
        """
        try:
            response = requests.get(EXCHANGE_RATE_API_URL, timeout=self.timeout)
            response.raise_for_status()
            rate = response.json().get('rates', {}).get('KRW')
            if not rate or float(rate) <= 0:
                logger.error(f"exchangerate-api: 잘못된 환율 응답 {rate}")
                return None
            return float(rate)
        except requests.exceptions.RequestException as e:
            logger.error(f"exchangerate-api 요청 실패: {e}")
        except (ValueError, AttributeError) as e:
            logger.error(f"exchangerate-api 응답 파싱 실패: {e}")
        return None

    def fetch_from_naver(self) -> Optional[float]:
        """
        네이버 금융 시장지표 페이지 스크래핑

        Returns:
            float: USD/KRW 환율, 실패 시 None
        """
        try:
            response = requests.get(NAVER_MARKET_INDEX_URL, timeout=self.timeout)
            response.raise_for_status()

            soup = BeautifulSoup(response.text, "html.parser")
            element = soup.select_one("div.head_info > span.value")
            if element is None:
                logger.error("네이버 환율: 환율 요소를 찾을 수 없습니다")
                return None
            return float(element.text.replace(",", ""))
        except requests.exceptions.RequestException as e:
            logger.error(f"네이버 환율 요청 실패: {e}")
        except ValueError as e:
            logger.error(f"네이버 환율 파싱 실패: {e}")
        return None

    def fetch_from_yfinance(self) -> Optional[float]:
        """
        yfinance KRW=X 최근 종가

        Returns:
            float: USD/KRW 환율, 실패 시 None
        """
        try:
            hist = yf.Ticker(YF_USD_KRW_TICKER).history(period="5d")
            if hist.empty:
                logger.error("yfinance: KRW=X 데이터 없음")
                return None
            return float(hist['Close'].iloc[-1])
        except Exception as e:
            # yfinance는 네트워크/파싱 오류를 여러 예외 타입으로 던짐
            logger.error(f"yfinance 환율 조회 실패: {e}")
            return None
