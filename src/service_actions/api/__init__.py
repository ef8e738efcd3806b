from .run import RunOptions, RunResult, run_catalog

__all__ = [
    "RunOptions",
    "RunResult",
    "run_catalog",
]
