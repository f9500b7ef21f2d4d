from __future__ import annotations

from typing import Iterable, Sequence

import pandas as pd

HISTORY_COLUMNS = ["date", "employeeName", "work", "status", "observedAt"]


def records_to_frame(rows: Iterable[dict], columns: Sequence[str] = HISTORY_COLUMNS) -> pd.DataFrame:
    return pd.DataFrame(list(rows), columns=list(columns))


def records_to_csv_text(rows: Iterable[dict], columns: Sequence[str] = HISTORY_COLUMNS) -> str:
    return records_to_frame(rows, columns).to_csv(index=False)
