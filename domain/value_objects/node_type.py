"""NodeType Value Object - 마인드맵 노드 종류"""
from enum import Enum


class NodeType(Enum):
    ROOT = 'root'
    CATEGORY = 'category'
    STOCK = 'stock'

    def __str__(self):
        return self.value
