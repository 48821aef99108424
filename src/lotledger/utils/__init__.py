"""Utility functions for lotledger."""

from lotledger.utils.date_parser import parse_trade_date
from lotledger.utils.amount_parser import parse_amount
from lotledger.utils.csv_tokenizer import tokenize_csv

__all__ = ["parse_trade_date", "parse_amount", "tokenize_csv"]
