import io
import threading
from collections import deque
from datetime import datetime
from typing import List

import pandas as pd

from .schemas import HistoryEntry

PREVIEW_CHARS = 20
SEPARATOR = "-" * 40


def _preview(text: str) -> str:
    return text[:PREVIEW_CHARS] + ("..." if len(text) > PREVIEW_CHARS else "")


class OperationHistory:
    """Bounded, newest-first log of completed operations.

    Owned by the caller (the HTTP service), never by the cipher engine.
    """

    def __init__(self, limit: int = 20):
        self.limit = limit
        self._entries = deque(maxlen=limit)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, algorithm: str, mode: str, input_text: str, output_text: str) -> HistoryEntry:
        entry = HistoryEntry(
            timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            algorithm=algorithm,
            mode=mode,
            input=_preview(input_text),
            output=_preview(output_text),
        )
        with self._lock:
            self._entries.appendleft(entry)
        return entry

    def entries(self) -> List[HistoryEntry]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count

    def export_text(self) -> str:
        return "\n\n".join(
            f"{e.timestamp}\n"
            f"Operation: {e.mode} ({e.algorithm})\n"
            f"Input: {e.input}\n"
            f"Output: {e.output}\n"
            f"{SEPARATOR}"
            for e in self.entries()
        )

    def export_excel(self) -> bytes:
        columns = ["timestamp", "algorithm", "mode", "input", "output"]
        df = pd.DataFrame([e.model_dump() for e in self.entries()], columns=columns)
        df.columns = ["Timestamp", "Algorithm", "Mode", "Input", "Output"]

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name='History', index=False)
        return output.getvalue()
