"""Readers that turn transaction files into Transaction models."""

from payledger.ingestion.base import BaseReader
from payledger.ingestion.csv_reader import CsvTransactionReader

__all__ = ["BaseReader", "CsvTransactionReader"]
