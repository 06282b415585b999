"""Import/Export codecs and schema migration"""
from data.serialization.holding_migration import (
    CURRENT_SCHEMA_VERSION,
    MIGRATIONS,
    load_holdings,
    migrate_holding_records,
)
from data.serialization.csv_codec import CsvImportResult, export_to_csv, import_from_csv
from data.serialization.json_codec import export_to_json, import_from_json

__all__ = [
    'CURRENT_SCHEMA_VERSION',
    'MIGRATIONS',
    'load_holdings',
    'migrate_holding_records',
    'CsvImportResult',
    'export_to_csv',
    'import_from_csv',
    'export_to_json',
    'import_from_json',
]
