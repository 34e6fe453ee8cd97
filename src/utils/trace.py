"""Tracing module: logs Sudoku solver steps and writes to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'assign', 'backtrack', 'consistency_check', 'solution_found'
    row: Optional[int] = None
    col: Optional[int] = None
    value: Optional[int] = None
    depth: Optional[int] = None  # Recursion depth of the search node
    filled_cells: Optional[int] = None
    is_valid: Optional[bool] = None
    reason: Optional[str] = None  # Why backtracking occurred, etc.


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_assign(self, row: int, col: int, value: int, depth: int):
        """Log a tentative cell assignment."""
        if not self.enabled:
            return
        self._record('assign', row=row, col=col, value=value, depth=depth)

    def log_backtrack(self, row: int, col: int, depth: int, reason: str = "No safe value"):
        """Log a backtrack event."""
        if not self.enabled:
            return
        self._record('backtrack', row=row, col=col, depth=depth, reason=reason)

    def log_consistency_check(self, is_valid: bool, reason: str = ""):
        """Log a whole-board consistency check."""
        if not self.enabled:
            return
        self._record('consistency_check', is_valid=is_valid, reason=reason or None)

    def log_solution_found(self, filled_cells: int, depth: int):
        """Log when a solution is found."""
        if not self.enabled:
            return
        self._record('solution_found', filled_cells=filled_cells, depth=depth)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'row', 'col', 'value',
            'depth', 'filled_cells', 'is_valid', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_assignments': action_counts.get('assign', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
            'max_depth': max((s.depth for s in self.steps if s.depth is not None), default=0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
