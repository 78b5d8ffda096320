"""
Trend Table Exporter.

Writes the listing x month rating table for a listings query to CSV,
with a metadata JSON sidecar.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import List, Optional

import pandas as pd

from reviewboard.models.listing import ListingsResult

logger = logging.getLogger(__name__)

BASE_COLUMNS = ["Listing", "Listing ID", "Reviews", "Rating"]


class TrendTableExporter:
    """
    Exports monthly rating trends for every listing in a query result.
    """

    def __init__(self, output_dir: str = "output"):
        """
        Args:
            output_dir: Directory to save CSV and metadata files
        """
        self.output_dir = str(output_dir)

    def build_table(self, result: ListingsResult) -> pd.DataFrame:
        """
        Build the trend table.

        One row per listing; one column per month present in any listing.
        Months with no reviews for a listing are left empty.

        Args:
            result: Assembled listings query

        Returns:
            DataFrame sorted by Rating (descending, unrated last)
        """
        months = self._month_columns(result)

        rows = []
        for bundle in result.listings:
            row = {
                "Listing": bundle.listing_name,
                "Listing ID": bundle.listing_id,
                "Reviews": bundle.review_count,
                "Rating": bundle.rating_avg,
            }
            by_month = {p.date: p.rating_avg for p in bundle.trend}
            for month in months:
                row[month] = by_month.get(month)
            rows.append(row)

        if not rows:
            logger.warning("No listings found, creating empty trend table")
            return pd.DataFrame(columns=BASE_COLUMNS + months)

        df = pd.DataFrame(rows, columns=BASE_COLUMNS + months)
        return df.sort_values("Rating", ascending=False, na_position="last", kind="stable")

    def export(self, result: ListingsResult, stamp: Optional[str] = None) -> str:
        """
        Save the trend table and its metadata.

        Args:
            result: Assembled listings query
            stamp: File name suffix; defaults to the current UTC time

        Returns:
            Path to the generated CSV file
        """
        generated_at = datetime.now(timezone.utc)
        stamp = stamp or generated_at.strftime("%Y%m%dT%H%M%SZ")

        df = self.build_table(result)
        months = self._month_columns(result)

        os.makedirs(self.output_dir, exist_ok=True)
        output_path = os.path.join(self.output_dir, f"trend_{stamp}.csv")
        df.to_csv(output_path, index=False)

        logger.info(
            f"Trend table saved to {output_path} "
            f"({len(df)} listings, {len(months)} months)"
        )

        metadata_path = os.path.join(self.output_dir, f"trend_{stamp}_metadata.json")
        metadata = {
            "filters": result.filters,
            "month_range": {
                "start": months[0] if months else None,
                "end": months[-1] if months else None,
            },
            "listing_count": result.listing_count,
            "review_count": result.review_count,
            "generated_at": generated_at.isoformat().replace("+00:00", "Z"),
        }
        with open(metadata_path, "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2)

        logger.info(f"Metadata saved to {metadata_path}")

        return output_path

    @staticmethod
    def _month_columns(result: ListingsResult) -> List[str]:
        months = set()
        for bundle in result.listings:
            months.update(p.date for p in bundle.trend)
        return sorted(months)
