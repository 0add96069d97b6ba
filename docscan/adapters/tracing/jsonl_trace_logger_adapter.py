from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from docscan.ports.trace_log_port import TraceLogPort


class JsonlTraceLoggerAdapter(TraceLogPort):
    def __init__(self, trace_file: Path) -> None:
        self._trace_file = trace_file

    def log(self, payload: dict[str, Any]) -> None:
        record = {'ts': datetime.now(UTC).isoformat(), **payload}
        self._trace_file.parent.mkdir(parents=True, exist_ok=True)
        with self._trace_file.open('a', encoding='utf-8') as fh:
            fh.write(json.dumps(record, ensure_ascii=True, default=str))
            fh.write('\n')
