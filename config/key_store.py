"""설정값 저장/조회를 위한 Key-Value Store (JSON 기반)"""
import os
import json
from threading import Lock

# === 프로젝트 루트 기준 경로 설정 ===
# __file__: .../config/key_store.py
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
BASE_DIR = os.path.join(PROJECT_ROOT, "data", "persistence", "db")
KEY_STORE_PATH = os.getenv("KEY_STORE_PATH", os.path.join(BASE_DIR, "key_store.json"))


# 파일 락 (동시 접근 방지)
_lock = Lock()

# === Key 상수 정의 ===
AT_KEY = "AT_KEY"
AT_EX_DATE = "AT_EX_DATE"

PORTFOLIO = "PORTFOLIO"
EXCHANGE_RATE_STATE = "EXCHANGE_RATE_STATE"


def set_path(path: str) -> None:
    """저장 파일 경로 변경 (테스트용)"""
    global KEY_STORE_PATH
    with _lock:
        KEY_STORE_PATH = path


def _get_default_values():
    """기본값 딕셔너리 반환"""
    return {}


def _load_db():
    """JSON 파일에서 데이터 로드"""
    if not os.path.exists(KEY_STORE_PATH):
        print(f"[key_store] File not found, creating with default values: {KEY_STORE_PATH}")
        default_data = _get_default_values()
        _save_db(default_data)
        return default_data

    try:
        with open(KEY_STORE_PATH, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"[key_store] Warning: Failed to load {KEY_STORE_PATH}: {e}")
        return {}


def _save_db(data):
    """JSON 파일에 데이터 저장"""
    directory = os.path.dirname(KEY_STORE_PATH)
    if directory:
        os.makedirs(directory, exist_ok=True)
    try:
        with open(KEY_STORE_PATH, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        print(f"[key_store] Error: Failed to save {KEY_STORE_PATH}: {e}")


def write(key, value):
    """키와 값을 JSON 파일에 저장합니다."""
    with _lock:
        db = _load_db()
        db[key] = value
        _save_db(db)


def read(key, default=None):
    """주어진 키에 해당하는 값을 JSON 파일에서 읽어 반환합니다."""
    with _lock:
        db = _load_db()
        return db.get(key, default)


def get_all_keys():
    """JSON 파일에 저장된 모든 키를 반환합니다."""
    with _lock:
        db = _load_db()
        return list(db.keys())


def delete(key):
    """주어진 키를 JSON 파일에서 삭제합니다."""
    with _lock:
        db = _load_db()
        if key in db:
            del db[key]
            _save_db(db)
