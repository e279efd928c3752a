"""
Engine decision export for tic-tac-toe.

Enumerates the positions reachable from the empty board and records what the
engine plays in each one, so front ends and regression checks can use a
precomputed table instead of calling the search.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
from collections import deque
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import EngineConfig
from .engine import find_best_move_with_metrics
from .metrics import SearchStats
from .tictactoe_game import TICTACTOE, Position
from .tracking import log_artifact, log_params

EXPORT_VERSION = "1.0.0"
FIELDNAMES = [
    "board", "to_move", "status", "winner",
    "best_move", "immediate_move", "search_depth", "nodes",
]


@dataclass
class ExportArgs:
    out: Path
    limit: Optional[int] = None
    format: str = "csv"  # one of: "csv", "parquet", "both"
    config: EngineConfig = field(default_factory=EngineConfig)
    verbose: bool = False


def reachable_positions(limit: Optional[int] = None) -> List[Position]:
    """Positions reachable from the empty board with X first, in BFS order."""
    start = Position.empty()
    q = deque([start])
    seen = {start}
    order: List[Position] = []
    while q:
        p = q.popleft()
        order.append(p)
        if limit is not None and len(order) >= limit:
            break
        for child in TICTACTOE.children(p):
            if child not in seen:
                seen.add(child)
                q.append(child)
    return order


def _schema_hash(fieldnames: List[str]) -> str:
    payload = "\n".join(sorted(fieldnames)).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def decision_row(position: Position, config: EngineConfig) -> Dict[str, Any]:
    stats = SearchStats()
    outcome = TICTACTOE.check_winner(position)
    choice = find_best_move_with_metrics(position, config=config, stats=stats)
    move = "" if choice.move is None else f"{choice.move[0]},{choice.move[1]}"
    return {
        "board": str(position),
        "to_move": position.to_move,
        "status": outcome.status.value,
        "winner": outcome.winner or 0,
        "best_move": move,
        "immediate_move": choice.immediate_move,
        "search_depth": choice.search_depth,
        "nodes": stats.nodes,
    }


def _package_version() -> Optional[str]:
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("gametree")
    except PackageNotFoundError:
        return None


def run_export(args: ExportArgs) -> Path:
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")
    want_parquet = fmt in {"parquet", "both"}
    have_parquet = (importlib.util.find_spec("pandas") is not None
                    and importlib.util.find_spec("pyarrow") is not None)
    if fmt == "parquet" and not have_parquet:
        raise RuntimeError(
            "Parquet dependencies not available (install pandas and pyarrow). "
            "Use pip install .[parquet] to enable parquet support."
        )
    args.out.mkdir(parents=True, exist_ok=True)

    positions = reachable_positions(args.limit)
    logging.info("Computing engine decisions for %d positions…", len(positions))
    rows = [decision_row(p, args.config) for p in positions]

    csv_path = args.out / "engine_decisions.csv"
    parquet_path = args.out / "engine_decisions.parquet"
    wrote_csv = False
    wrote_parquet = False
    if fmt in {"csv", "both"}:
        with csv_path.open("w", newline="") as f:
            w = csv.DictWriter(f, fieldnames=FIELDNAMES)
            w.writeheader()
            for r in rows:
                w.writerow(r)
        wrote_csv = True
        logging.info("Wrote CSV: %s (%d rows)", csv_path, len(rows))
    if want_parquet:
        if have_parquet:
            import pandas as pd  # type: ignore

            pd.DataFrame(rows, columns=FIELDNAMES).to_parquet(parquet_path)
            wrote_parquet = True
            logging.info("Wrote Parquet: %s", parquet_path)
        else:
            logging.warning("Parquet dependencies not available; proceeding with CSV only.")

    manifest = {
        "export_version": EXPORT_VERSION,
        "package_version": _package_version(),
        "created_at": datetime.now(timezone.utc).isoformat(),
        "config": asdict(args.config),
        "limit": args.limit,
        "format": fmt,
        "row_count": len(rows),
        "immediate_moves": sum(1 for r in rows if r["immediate_move"]),
        "schema_hash": _schema_hash(FIELDNAMES),
        "files": {
            "csv": str(csv_path) if wrote_csv else None,
            "parquet": str(parquet_path) if wrote_parquet else None,
        },
    }
    (args.out / "manifest.json").write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json")

    log_params({"limit": args.limit, "format": fmt, "rows": len(rows), **asdict(args.config)})
    log_artifact(args.out / "manifest.json")
    if wrote_csv:
        log_artifact(csv_path)
    if wrote_parquet:
        log_artifact(parquet_path)
    return args.out
