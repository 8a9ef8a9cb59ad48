"""Execution result model.

Each example's metadata owns one ExecutionResult, created empty when the
example is declared and filled in by whatever runs the example.
"""

from datetime import datetime
from typing import Any, Optional, Union

from .compat import HashImitatable
from .deprecation import deprecate
from .types import ExampleStatus


class ExecutionResult(HashImitatable):
    """Outcome of running one example.

    Attributes:
        status: Final status of the example
        exception: Failure raised by the example, if any
        started_at: When the example started
        finished_at: When the example finished
        run_time: Duration in seconds
        pending_message: Reason given for a pending example
        pending_exception: Failure raised by a pending example
        pending_fixed: Whether a pending example unexpectedly passed
    """
    hash_attribute_names = (
        'status',
        'exception',
        'started_at',
        'finished_at',
        'run_time',
        'pending_message',
        'pending_exception',
        'pending_fixed',
    )

    status: Optional[ExampleStatus] = None
    exception: Optional[BaseException] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    run_time: Optional[float] = None
    pending_message: Optional[str] = None
    pending_exception: Optional[BaseException] = None
    pending_fixed: Optional[bool] = None

    def record_started(self, started_at: Optional[datetime] = None) -> None:
        self.started_at = started_at or datetime.now()

    def record_finished(self, status: Union[str, ExampleStatus],
                        finished_at: Optional[datetime] = None) -> None:
        """Record the final status and timing of the example.

        Args:
            status: Final status, as an ExampleStatus or its string value
            finished_at: Completion time, defaults to now
        """
        if not isinstance(status, ExampleStatus):
            status = ExampleStatus.from_str(status)
        self.status = status
        self.finished_at = finished_at or datetime.now()
        if self.started_at is not None:
            self.run_time = (self.finished_at - self.started_at).total_seconds()

    def example_skipped(self) -> bool:
        """Whether the example was pending without even running."""
        return self.status is ExampleStatus.PENDING and self.pending_exception is None

    def issue_deprecation(self, method_name: str, *args: Any) -> None:
        deprecate(
            "Treating `metadata['execution_result']` as a dict",
            "the attribute methods to access the data",
        )
