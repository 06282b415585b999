"""In-Memory Repository Implementations"""
from data.persistence.memory.user_repository_impl import InMemoryUserRepositoryImpl

__all__ = ['InMemoryUserRepositoryImpl']
