# market_sentiment/adapters/csv_series_writer.py
from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from market_sentiment.entities.market_analysis import MarketAnalysis
from market_sentiment.interfaces.series_writer import SeriesWriter

logger = logging.getLogger(__name__)


class CsvSeriesWriter(SeriesWriter):
    COLUMNS = ["date", "avg_sentiment", "volume", "price", "price_source", "data_source"]

    def write(self, analysis: MarketAnalysis, path: Path) -> Path:
        df = pd.DataFrame(
            [
                {
                    "date": p.day.isoformat(),
                    "avg_sentiment": p.avg_sentiment,
                    "volume": p.volume,
                    "price": p.price,
                    "price_source": p.price_source.value if p.price_source else None,
                    "data_source": analysis.source.value,
                }
                for p in analysis.series
            ],
            columns=self.COLUMNS,
        )

        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)

        logger.info(
            "Series exported",
            extra={"symbol": analysis.symbol, "rows": len(df), "path": str(path)},
        )
        return path
