"""Config Layer - 전역 설정 및 Key-Value Store"""
from config.item import is_test
from config import key_store

__all__ = ['is_test', 'key_store']
