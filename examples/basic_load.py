"""Fire a paced Poisson load at 500 events/s for a few seconds.

The generator runs in a worker thread and only counts events; the main
thread reports progress once per second.

Run:
    python examples/basic_load.py
"""

import threading
import time

import poissonscheduler
from poissonscheduler import Duration, MonotonicClock, PoissonProcessGenerator, paced

DURATION_S = 5
RATE = 500.0


def main() -> None:
    poissonscheduler.configure_from_env()

    operations = 0
    lock = threading.Lock()

    def record(timestamp):
        nonlocal operations
        with lock:
            operations += 1

    clock = MonotonicClock()
    generator = PoissonProcessGenerator(RATE, clock=clock)
    worker = threading.Thread(
        target=generator.run,
        args=(Duration.from_seconds(DURATION_S), paced(record, clock=clock)),
    )
    worker.start()

    for _ in range(DURATION_S):
        time.sleep(1)
        with lock:
            print(f"Operations executed {operations}")

    worker.join()
    print(f"All operations executed {operations} (expected ~{RATE * DURATION_S:.0f})")


if __name__ == "__main__":
    main()
