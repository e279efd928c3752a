"""
Run tracking helpers (optional MLflow backend).

MLflow is imported only when tracking is requested, so it stays an optional
dependency. Tracking never fails a run: problems are logged and skipped.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    if not enabled:
        yield False
        return
    try:
        import mlflow  # type: ignore

        if log_dir is not None:
            mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
        run = mlflow.start_run(run_name=run_name)
    except Exception as exc:
        logging.warning("Tracking disabled: %s", exc)
        yield False
        return
    with run:
        yield True


def log_params(params: Dict[str, object]) -> None:
    try:
        import mlflow  # type: ignore

        if mlflow.active_run() is not None:
            mlflow.log_params(params)
    except Exception as exc:
        logging.debug("log_params skipped: %s", exc)


def log_metrics(metrics: Dict[str, float]) -> None:
    try:
        import mlflow  # type: ignore

        if mlflow.active_run() is not None:
            mlflow.log_metrics(metrics)
    except Exception as exc:
        logging.debug("log_metrics skipped: %s", exc)


def log_artifact(path: Path, artifact_path: Optional[str] = None) -> None:
    try:
        import mlflow  # type: ignore

        if mlflow.active_run() is not None:
            mlflow.log_artifact(str(path), artifact_path=artifact_path)
    except Exception as exc:
        logging.debug("log_artifact skipped: %s", exc)
