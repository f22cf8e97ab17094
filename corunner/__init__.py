"""Tasks, thread helpers, a worker-thread executor, result states and generators."""

__version__ = "0.1.0"

__all__ = [
    "task",
    "threads",
    "executors",
    "worker_thread_executor",
    "consumer_context",
    "result_state",
    "shared_result_state",
    "generator",
]