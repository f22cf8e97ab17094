# corunner

Building blocks for concurrent Python programs that run on threads.

## Modules

- `corunner.task`
  - `Task` holds a callable and runs it at most once. Calling the task runs the callable and leaves the task empty. `clear()` drops the callable without running it, and calls the callable's `discard()` method if it has one. `take()` moves the callable into a new task. `bool(task)` tells whether the task still holds something.
  - `bind(callable, *args, **kwargs)` returns a callable that takes no arguments. With no arguments to bind, it returns the callable itself.
  - `bind_with_try_catch(...)` binds the same way, but the returned callable swallows any `Exception` it raises.
- `corunner.threads`
  - `WorkerThread(name, target)` is a named daemon thread. It starts at once and must be joined once.
  - `BinarySemaphore` is a semaphore whose count is never more than one. It has `release`, `acquire`, `try_acquire`, `try_acquire_for(seconds)` and `try_acquire_until(monotonic_deadline)`.
  - `current_virtual_id()` returns a small id for the calling thread. Ids are unique per thread and are handed out in order of first use.
  - `hardware_concurrency()` returns the processor count, or 8 when it cannot be found.
- `corunner.executors`
  - `Executor` is the abstract base class, with `enqueue`, `enqueue_many`, `shutdown` and `shutdown_requested`. Using an executor as a context manager shuts it down on exit.
  - `ExecutorCollection` holds a list of executors. `register()` refuses `None` and refuses an executor that is already registered. `shutdown_all()` shuts every executor down in registration order.
  - `RuntimeShutdownError` is raised by executors that get work after shutdown.
- `corunner.worker_thread_executor`
  - `WorkerThreadExecutor` runs tasks one at a time, in order, on a single dedicated thread.
  - It accepts `Task` objects or plain callables.
  - `shutdown()` stops the thread and joins it. Every task that has not run yet is cleared.
- `corunner.consumer_context`
  - `AwaitContext`, `AwaitViaFunctor`, `WaitContext`, `WhenAnyContext` and `ConsumerContext` are the ways a consumer waits for a result and gets woken.
  - If an `AwaitViaFunctor` is discarded instead of run, its context is interrupted with `BrokenTaskError` and then resumed.
- `corunner.result_state`
  - `ResultState` is a value or an exception that one producer sets and one consumer reads.
  - The producer calls `set_result` or `set_exception`, then `complete_producer()`. A producer that completes without setting an outcome leaves a `BrokenTaskError`.
  - The consumer can call `wait()`, `wait_for(seconds)`, `get()`, `await_(resumer)` or `when_any(context)`.
  - `status()` returns a `ResultStatus`: `IDLE`, `VALUE` or `EXCEPTION`.
- `corunner.shared_result_state`
  - `SharedResultState` is the same idea, but with any number of consumers.
  - Consumers can block with `wait`, `wait_for` or `wait_until`, or register resumers with `await_`.
  - Resumers run on the thread that completes the producer, newest first.
- `corunner.generator`
  - `Generator` wraps an iterable. Starting iteration takes the first value at once.
  - `close()` stops the underlying iterator and empties the generator.
  - Iterating an empty generator raises `EmptyGeneratorError`.

## Installation

```
pip install .
```

## Example

```python
from corunner.worker_thread_executor import WorkerThreadExecutor
from corunner.result_state import ResultState, ResultStatus
from corunner.task import Task

state = ResultState()

def produce():
    state.set_result(42)
    state.complete_producer()

executor = WorkerThreadExecutor("worker")
executor.enqueue(Task(produce))
state.wait()
assert state.status() is ResultStatus.VALUE
assert state.get() == 42
executor.shutdown()
```

## What it does not do

The package does not provide:

- a thread pool, per-task thread, inline or manual executor;
- timers or delays;
- a runtime object that creates executors and owns them;
- `async`/`await` integration;
- helpers that combine many results, such as "when all" or "when any" over a list of results.

`WhenAnyContext` and `ResultState.when_any` are only the low-level pieces such a helper would build on.

## Running the tests

```
pip install .[test]
pytest
```