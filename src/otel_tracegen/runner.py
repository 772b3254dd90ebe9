"""
Run coordinator: spawns workers, times the run and waits for completion.
"""

from typing import List, Optional
import logging
import threading
import time

from opentelemetry import trace

from .models import ScenarioConfig
from .utils import format_duration
from .worker import Worker, WorkerLoggerAdapter


def run(config: ScenarioConfig, tracer: trace.Tracer, logger: Optional[logging.Logger] = None) -> None:
    """
    Execute the test scenario.

    Returns only after every worker thread has exited. In duration mode
    the calling thread sleeps for ``config.duration`` and then clears the
    shared stop signal.

    Args:
        config: Scenario to run
        tracer: Tracer shared by all workers
        logger: Logger for diagnostics; defaults to this module's logger

    Raises:
        InvalidConfiguration: If neither `traces` nor `duration` is positive.
            Nothing is started in that case.
    """
    log = logger or logging.getLogger(__name__)
    config = config.validated()

    running = threading.Event()
    running.set()

    workers: List[Worker] = []
    threads: List[threading.Thread] = []
    try:
        for i in range(config.workers):
            w = Worker(
                id=i,
                tracer=tracer,
                traces=config.traces,
                marshal=config.marshal,
                debug=config.debug,
                firehose=config.firehose,
                pause=config.pause,
                duration=config.duration,
                running=running,
                logger=WorkerLoggerAdapter(log, {"worker": i}),
            )
            t = threading.Thread(target=w.simulate, name=f"tracegen-worker-{i}")
            workers.append(w)
            threads.append(t)
            t.start()

        if config.is_duration_mode:
            log.info(f"Running {config.workers} workers for {format_duration(config.duration)}")
            time.sleep(config.duration.total_seconds())
            running.clear()
        else:
            log.info(f"Running {config.workers} workers, {config.traces} traces each")
    except BaseException:
        # stop duration-mode workers that already started, then re-raise
        running.clear()
        log.warning(f"Run interrupted, waiting for {len(threads)} started workers to exit")
        for t in threads:
            if t.ident is not None:
                t.join()
        raise

    for t in threads:
        t.join()

    total = sum(w.traces_generated for w in workers)
    log.info(f"Generated {total} traces from {len(workers)} workers")
