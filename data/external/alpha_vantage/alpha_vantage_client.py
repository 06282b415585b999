# -*- coding: utf-8 -*-
"""Alpha Vantage API 클라이언트 (해외 주식)"""
import logging
from typing import Dict, Optional

import requests

from config import item

logger = logging.getLogger(__name__)

ALPHA_VANTAGE_BASE_URL = 'https://www.alphavantage.co/query'
DEMO_API_KEY = 'demo'


class AlphaVantageClient:
    """Alpha Vantage query 엔드포인트 클라이언트"""

    def __init__(self, api_key: Optional[str] = None, timeout: float = item.REQUEST_TIMEOUT):
        self.api_key = api_key or item.ALPHA_VANTAGE_API_KEY or DEMO_API_KEY
        self.timeout = timeout

    def is_configured(self) -> bool:
        """demo 키가 아닌 실제 키가 설정되어 있는지"""
        return bool(self.api_key) and self.api_key != DEMO_API_KEY

    def query(self, function: str, params: Dict[str, str]) -> Optional[dict]:
        """
        query 호출

        Args:
            function: SYMBOL_SEARCH, GLOBAL_QUOTE 등
            params: 추가 파라미터

        Returns:
            Optional[dict]: 응답 JSON, 실패 시 None
        """
        query_params = {"function": function, "apikey": self.api_key}
        query_params.update(params)
        try:
            response = requests.get(ALPHA_VANTAGE_BASE_URL, params=query_params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Alpha Vantage {function} 요청 실패: {e}")
            return None
        except ValueError:
            logger.error(f"Alpha Vantage {function} JSON 파싱 실패")
            return None

        # 호출 한도 초과 시 Note/Information 필드만 내려옴
        if 'Note' in data or 'Information' in data:
            logger.warning(f"Alpha Vantage {function} 제한: {data.get('Note') or data.get('Information')}")
            return None
        return data
