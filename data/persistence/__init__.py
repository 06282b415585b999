"""Persistence - JSON 파일 저장소 및 메모리 저장소"""
