"""전역 상수 및 설정"""
import os
from pathlib import Path

# .env 파일 로드 (config/item.py가 import될 때 자동 로드)
from dotenv import load_dotenv

# 프로젝트 루트의 .env 파일 로드
project_root = Path(__file__).parent.parent
dotenv_path = project_root / '.env'
load_dotenv(dotenv_path=dotenv_path, override=False)


def _get_bool_from_env(name: str, default: bool) -> bool:
    """
    환경변수에서 bool 값을 읽어옴

    Args:
        name: 환경변수 이름
        default: 값이 없을 때 기본값

    Returns:
        bool: 'false', '0', 'no' 이면 False, 그 외 값이 있으면 True
    """
    value = os.getenv(name)
    if not value:
        return default
    return value.strip().lower() not in ('false', '0', 'no')


def _get_is_test_from_env():
    """
    환경변수에서 IS_TEST 값을 읽어옴

    Returns:
        bool: 테스트 모드 여부 (기본값: True)
    """
    test_value = os.getenv('IS_TEST')
    print(f"📌 IS_TEST 환경변수: {test_value if test_value else '(설정되지 않음)'}")
    return _get_bool_from_env('IS_TEST', True)


is_test = _get_is_test_from_env()

# === 서버 ===
HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', '5000'))
SECRET_KEY = os.getenv('SECRET_KEY', 'mindstock-dev-secret')

# === 인증 (JWT) ===
JWT_SECRET = os.getenv('JWT_SECRET', 'your-secret-key-change-in-production')
JWT_ALGORITHM = 'HS256'
JWT_EXPIRES_DAYS = int(os.getenv('JWT_EXPIRES_DAYS', '7'))

# === 외부 API ===
KIS_APP_KEY = os.getenv('KIS_APP_KEY', '')
KIS_APP_SECRET = os.getenv('KIS_APP_SECRET', '')
KIS_BASE_URL = os.getenv('KIS_BASE_URL', 'https://openapi.koreainvestment.com:9443')
ALPHA_VANTAGE_API_KEY = os.getenv('ALPHA_VANTAGE_API_KEY', 'demo')
REQUEST_TIMEOUT = 5  # 초

# === 환율 ===
DEFAULT_USD_TO_KRW_RATE = 1300.0
MIN_SANE_RATE = 800.0
MAX_SANE_RATE = 2000.0
EXCHANGE_RATE_UPDATE_MINUTES = 30
EXCHANGE_RATE_CACHE_SECONDS = 60 * 60  # 제공자 응답 캐시 (1시간)

# === 마인드맵 ===
# 드래그 종료 시 고정 위치를 해제할지 여부 (기본값: 고정 유지)
RELEASE_ON_DRAG_END = _get_bool_from_env('RELEASE_ON_DRAG_END', False)
MIND_MAP_WIDTH = 1200
MIND_MAP_HEIGHT = 800
SIMULATION_TICK_SECONDS = 0.05

# === 포트폴리오 ===
# 저장된 포트폴리오가 없을 때 예시 종목으로 시작할지 여부
USE_SAMPLE_PORTFOLIO = _get_bool_from_env('USE_SAMPLE_PORTFOLIO', True)
MAX_BATCH_SYMBOLS = 20
