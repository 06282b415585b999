# -*- coding: utf-8 -*-
"""한국투자증권(KIS) Open API 클라이언트"""
import json
import logging
from datetime import datetime, timedelta
from typing import Dict, Optional

import requests

from config import item, key_store

logger = logging.getLogger(__name__)

TOKEN_EXPIRATION_FORMAT = "%Y-%m-%d %H:%M:%S"


class KisClient:
    """
    한국투자증권 API 클라이언트

    접근 토큰은 key_store에 저장해 재사용하며, 만료 1시간 전에 새로 발급합니다.
    """

    def __init__(
        self,
        app_key: Optional[str] = None,
        app_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = item.REQUEST_TIMEOUT,
    ):
        self.app_key = item.KIS_APP_KEY if app_key is None else app_key
        self.app_secret = item.KIS_APP_SECRET if app_secret is None else app_secret
        self.base_url = base_url or item.KIS_BASE_URL
        self.timeout = timeout

    def is_configured(self) -> bool:
        """앱 키/시크릿이 모두 설정되어 있는지"""
        return bool(self.app_key) and bool(self.app_secret)

    def _request_token(self) -> Optional[str]:
        """
        접근 토큰 발급 후 key_store 저장

        Returns:
            Optional[str]: 발급된 토큰, 실패 시 None
        """
        url = self.base_url + "/oauth2/tokenP"
        body = {
            "grant_type": "client_credentials",
            "appkey": self.app_key,
            "appsecret": self.app_secret
        }
        try:
            response = requests.post(
                url,
                headers={"Content-Type": "application/json; charset=UTF-8"},
                data=json.dumps(body),
                timeout=self.timeout,
            )
            logger.debug(f"POST {url} - Status: {response.status_code}")
        except requests.exceptions.RequestException as e:
            logger.error(f"KIS 토큰 발급 요청 실패: {e}")
            return None

        if response.status_code != 200:
            logger.error(f"KIS 토큰 발급 실패 HTTP {response.status_code}: {response.text}")
            return None

        try:
            response_data = response.json()
        except ValueError:
            logger.error("KIS 토큰 응답 JSON 파싱 실패")
            return None

        access_token = response_data.get('access_token')
        if not access_token:
            logger.error("KIS 토큰 응답에 access_token이 없습니다")
            return None

        expiration = response_data.get('access_token_token_expired')
        if not expiration:
            expiration = (datetime.now() + timedelta(hours=24)).strftime(TOKEN_EXPIRATION_FORMAT)

        key_store.write(key_store.AT_KEY, access_token)
        key_store.write(key_store.AT_EX_DATE, expiration)
        logger.info(f"KIS 토큰 발급 완료 (만료일: {expiration})")
        return access_token

    def _get_token(self) -> Optional[str]:
        """유효한 토큰 조회 (없거나 만료 임박 시 재발급)"""
        token = key_store.read(key_store.AT_KEY)
        token_expiration = key_store.read(key_store.AT_EX_DATE)

        if token is None or not token_expiration:
            return self._request_token()

        try:
            expiration_datetime = datetime.strptime(token_expiration, TOKEN_EXPIRATION_FORMAT)
        except ValueError:
            logger.error("유효하지 않은 토큰 만료일 형식입니다. 새로운 토큰을 발급합니다.")
            return self._request_token()

        if datetime.now() < (expiration_datetime - timedelta(hours=1)):
            return token

        logger.info("토큰이 만료되었습니다. 새로운 토큰을 발급합니다.")
        return self._request_token()

    def get_request(
        self,
        end_point: str,
        tr_id: str,
        params: Optional[Dict[str, str]] = None
    ) -> Optional[dict]:
        """
        GET 요청 전송

        Args:
            end_point: API 엔드포인트
            tr_id: 거래 ID 헤더
            params: URL 쿼리 파라미터

        Returns:
            Optional[dict]: 응답 JSON, 미설정/토큰 실패/HTTP 오류 시 None
        """
        if not self.is_configured():
            return None

        token = self._get_token()
        if not token:
            return None

        url = self.base_url + end_point
        headers = {
            "Content-Type": "application/json; charset=UTF-8",
            "authorization": "Bearer " + token,
            "appkey": self.app_key,
            "appsecret": self.app_secret,
            "tr_id": tr_id,
        }

        try:
            response = requests.get(url, headers=headers, params=params or {}, timeout=self.timeout)
            logger.debug(f"GET {url} - Status: {response.status_code}")
            if response.status_code >= 400:
                logger.error(f"Response Body: {response.text}")
                return None
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"GET Request Failed: {e}")
        except ValueError:
            logger.error(f"GET {url} - JSON 파싱 실패")
        return None
