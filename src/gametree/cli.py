from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import ALGORITHMS, EngineConfig, data_out
from .engine import (
    choose_depth,
    find_best_move_fixed_depth,
    find_best_move_with_metrics,
    score_position,
    search_game,
)
from .errors import InvalidPositionError
from .export import ExportArgs, run_export
from .game_basics import empty_cells, index_of, is_valid_state, move_of
from .metrics import SearchStats
from .move_ordering import PRIORITY_NAMES, move_priorities, order_moves
from .move_search import evaluate_moves
from .nim import NIM, NimState, nim_sum, parse_heaps
from .tactics import fork_moves, gives_opponent_immediate_win
from .tactics import immediate_blocking_moves, immediate_winning_moves
from .tictactoe_game import TICTACTOE, Position
from .tracking import log_metrics, log_params, maybe_mlflow_run

BENCH_BOARDS = [
    "100000000",
    "000010000",
    "100020000",
    "120000000",
    "102000000",
    "100020001",
    "120010000",
    "100010002",
    "120120000",
    "000000000",
]


def _add_board_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--board", required=True, help="Board string, e.g., 100020200 (0=empty,1=X,2=O)")
    p.add_argument(
        "--to-move",
        default=None,
        help="Side to move (X, O, 1 or 2); inferred from piece counts when omitted",
    )


def _add_search_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--algorithm", choices=ALGORITHMS, default=None, help="Search algorithm")
    p.add_argument("--depth", type=int, default=None, help="Fixed search depth")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gametree", description="Game-tree search engine CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    p_move = sub.add_parser("move", help="Best tic-tac-toe move for the side to move")
    _add_board_args(p_move)
    _add_search_args(p_move)
    p_move.add_argument(
        "--no-ordering", action="store_true", help="Search moves in generator order"
    )
    p_move.add_argument(
        "--explain", action="store_true", help="Also print the searched score of every move"
    )

    p_score = sub.add_parser("score", help="Root value of a board for the side to move")
    _add_board_args(p_score)
    _add_search_args(p_score)

    p_tac = sub.add_parser("tactics", help="List wins, blocks, forks and move order")
    _add_board_args(p_tac)

    p_nim = sub.add_parser("nim", help="Best Nim move (normal play)")
    p_nim.add_argument("--heaps", required=True, help='Comma-separated heap sizes, e.g. "1,2,3" (searched exhaustively unless --depth is given)')
    _add_search_args(p_nim)

    p_bench = sub.add_parser("bench", help="Compare nodes visited across search variants")
    p_bench.add_argument(
        "--boards", type=int, default=len(BENCH_BOARDS), help="Number of benchmark boards to use"
    )
    p_bench.add_argument("--depth", type=int, default=9, help="Search depth")
    p_bench.add_argument(
        "--tracking", choices=["none", "mlflow"], default="none", help="Experiment tracking backend"
    )
    p_bench.add_argument(
        "--log-dir", type=Path, default=Path("runs"), help="Directory for mlflow local backend"
    )

    p_export = sub.add_parser("export", help="Export engine decisions for reachable positions")
    p_export.add_argument(
        "--out", type=Path, default=None, help="Output directory (default: $GAMETREE_DATA_OUT or ./data_raw)"
    )
    p_export.add_argument("--limit", type=int, default=None, help="Only the first N positions (BFS order)")
    p_export.add_argument(
        "--format",
        choices=["csv", "parquet", "both"],
        default="csv",
        help="Export format: csv (default), parquet, both",
    )
    p_export.add_argument(
        "--tracking", choices=["none", "mlflow"], default="none", help="Experiment tracking backend"
    )
    p_export.add_argument(
        "--log-dir", type=Path, default=Path("runs"), help="Directory for mlflow local backend"
    )

    return p


def _parse_position(ns: argparse.Namespace) -> Position:
    position = Position.from_string(ns.board, ns.to_move)
    if ns.to_move is None and not is_valid_state(position.cells):
        raise InvalidPositionError("Board is not a valid reachable state; pass --to-move to search it anyway.")
    return position


def _fmt_move(move) -> str:
    return "None" if move is None else f"({move[0]}, {move[1]})"


def _cmd_move(ns: argparse.Namespace, config: EngineConfig) -> int:
    position = _parse_position(ns)
    if ns.depth is not None:
        move = find_best_move_fixed_depth(
            position,
            depth=ns.depth,
            algorithm=config.algorithm,
            use_ordering=config.use_ordering,
        )
        print(f"move={_fmt_move(move)} immediate_move=False search_depth={ns.depth}")
    else:
        choice = find_best_move_with_metrics(position, config=config)
        print(
            f"move={_fmt_move(choice.move)} immediate_move={choice.immediate_move} "
            f"search_depth={choice.search_depth}"
        )
    if ns.explain:
        if ns.depth is not None:
            depth = ns.depth
        else:
            depth = choose_depth(len(empty_cells(position.cells)), config)
        get_moves = order_moves if config.use_ordering else TICTACTOE.get_moves
        print(f"scores at depth={depth}")
        for move, score in evaluate_moves(
            depth, TICTACTOE.heuristic, get_moves, TICTACTOE.apply_move, position
        ):
            print(f"  {_fmt_move(move)} score={score:g}")
    return 0


def _cmd_score(ns: argparse.Namespace, config: EngineConfig) -> int:
    position = _parse_position(ns)
    stats = SearchStats()
    depth = ns.depth if ns.depth is not None else config.max_depth
    value = score_position(position, depth=depth, algorithm=config.algorithm, stats=stats)
    print(f"score={value:g} depth={depth} nodes={stats.nodes}")
    return 0


def _cmd_tactics(ns: argparse.Namespace) -> int:
    position = _parse_position(ns)
    board, player = position.cells, position.to_move

    def moves(indices: List[int]) -> List[tuple]:
        return [move_of(i) for i in indices]

    unsafe = [
        m for m in TICTACTOE.get_moves(position)
        if gives_opponent_immediate_win(board, player, index_of(m))
    ]
    print(
        f"to_move={player} wins={moves(immediate_winning_moves(board, player))} "
        f"blocks={moves(immediate_blocking_moves(board, player))} "
        f"forks={moves(fork_moves(board, player))} unsafe={unsafe}"
    )
    for move, priority in sorted(move_priorities(position).items(), key=lambda kv: kv[1]):
        print(f"  {_fmt_move(move)} {PRIORITY_NAMES[priority]}")
    return 0


def _cmd_nim(ns: argparse.Namespace, config: EngineConfig) -> int:
    state = NimState(parse_heaps(ns.heaps))
    depth = ns.depth if ns.depth is not None else sum(state.heaps)
    stats = SearchStats()
    move = search_game(NIM, state, depth, config.algorithm, stats=stats)
    if move is None:
        print("move=None")
    else:
        print(f"move=heap:{move.heap} new_size:{move.new_size} nim_sum={nim_sum(state.heaps)} nodes={stats.nodes}")
    return 0


def _cmd_bench(ns: argparse.Namespace) -> int:
    boards = [Position.from_string(b) for b in BENCH_BOARDS[: max(ns.boards, 0)]]
    variants = [
        ("minimax", False),
        ("alphabeta", False),
        ("alphabeta", True),
    ]
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="bench", log_dir=ns.log_dir):
        log_params({"boards": len(boards), "depth": ns.depth})
        for algorithm, ordered in variants:
            stats = SearchStats()
            for b in boards:
                find_best_move_fixed_depth(
                    b, depth=ns.depth, algorithm=algorithm, use_ordering=ordered, stats=stats
                )
            label = f"{algorithm}{'_ordered' if ordered else ''}"
            print(f"{label} nodes={stats.nodes} leaf_evals={stats.leaf_evals} cutoffs={stats.cutoffs}")
            log_metrics({f"{label}_{k}": v for k, v in stats.as_dict().items()})
    return 0


def _cmd_export(ns: argparse.Namespace, config: EngineConfig) -> int:
    out = ns.out if ns.out is not None else data_out()
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="export", log_dir=ns.log_dir):
        run_export(ExportArgs(out=out, limit=ns.limit, format=ns.format, config=config,
                              verbose=ns.verbose))
    logging.info("Exported engine decisions to: %s", out)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("gametree"))
        except Exception:
            print("unknown")
        return 0

    try:
        config = EngineConfig.from_env()
        overrides = {}
        if getattr(ns, "algorithm", None) is not None:
            overrides["algorithm"] = ns.algorithm
        if getattr(ns, "no_ordering", False):
            overrides["use_ordering"] = False
        if overrides:
            config = replace(config, **overrides)

        if ns.cmd == "move":
            return _cmd_move(ns, config)
        if ns.cmd == "score":
            return _cmd_score(ns, config)
        if ns.cmd == "tactics":
            return _cmd_tactics(ns)
        if ns.cmd == "nim":
            return _cmd_nim(ns, config)
        if ns.cmd == "bench":
            return _cmd_bench(ns)
        if ns.cmd == "export":
            return _cmd_export(ns, config)
    except ValueError as exc:
        logging.error("%s", exc)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
