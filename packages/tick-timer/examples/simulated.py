"""Simulated time -- drive a Timer without waiting on the wall clock.

Demonstrates:
- SimulatedScheduler and its ManualClock
- The polling interval bounding how often ticks can fire
- Auto-stop at the first poll that is both due and past the duration

Run: python -m examples.simulated
"""

from tick_timer import SimulatedScheduler, Timer


def main() -> None:
    print("=== Simulated ===\n")
    sched = SimulatedScheduler()

    timer = Timer(
        lambda elapsed: print(f"  tick at {elapsed} ms"),
        resolution=100,
        duration=250,
        scheduler=sched,
        clock=sched.clock,
    )
    timer.start()

    for _ in range(8):
        sched.advance(50)
        print(f"t={sched.clock.now_ms():>3}  state={timer.state.value}")


if __name__ == "__main__":
    main()
