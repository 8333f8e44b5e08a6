"""Export service for projection tables."""

from dataclasses import asdict, fields
from typing import List

import pandas as pd

from freedom_number.schemas import YearRecord

# Record field -> CSV header, in export order
CSV_COLUMNS = {
    "age": "Age",
    "contribution": "Contribution",
    "recurring_spend": "Regular",
    "event_spend": "Planned",
    "total_spend": "Total",
    "buffered_spend": "Buffer",
    "start_corpus": "StartCorpus",
    "investment_return": "Return",
    "end_corpus": "EndCorpus",
}


class ExportService:
    """Service for turning projection records into tables and files."""

    def __init__(self):
        pass

    def to_dataframe(self, records: List[YearRecord]) -> pd.DataFrame:
        """One row per record, columns named after the record fields."""
        columns = [f.name for f in fields(YearRecord)]
        return pd.DataFrame([asdict(r) for r in records], columns=columns)

    def to_csv(self, records: List[YearRecord]) -> str:
        """CSV text with the projection download headers."""
        df = self.to_dataframe(records)[list(CSV_COLUMNS)].rename(columns=CSV_COLUMNS)
        return df.to_csv(index=False, lineterminator="\n")

    def sorted_page(
        self, df: pd.DataFrame, sort_by: str, ascending: bool, page: int, page_size: int
    ) -> pd.DataFrame:
        """Sort the whole table, then cut out one page of it."""
        ordered = df.sort_values(sort_by, ascending=ascending, kind="mergesort")
        start = (page - 1) * page_size
        return ordered.iloc[start : start + page_size]
