"""Countdown -- a bounded timer on real wall-clock time.

Demonstrates:
- Creating a Timer with a resolution and a duration
- Receiving elapsed milliseconds in the callback
- Reacting to auto-stop with an on_stop hook

Run: python -m examples.countdown
"""

import threading

from tick_timer import StopReason, Timer

TOTAL_MS = 3500


def show(elapsed: int) -> None:
    remaining = (TOTAL_MS - elapsed) / 1000
    print(f"  {elapsed:>5} ms elapsed  |  ~{remaining:.1f}s left")


def main() -> None:
    print("=== Countdown ===\n")
    done = threading.Event()

    def finished(timer: Timer, reason: StopReason) -> None:
        print(f"\nTimer {reason.value} after {timer.ticks} ticks.")
        done.set()

    # Tick roughly every 500ms, stop on our own after 3.5s.
    timer = Timer(show, resolution=500, duration=TOTAL_MS)
    timer.on_stop(finished)
    timer.start()
    done.wait()


if __name__ == "__main__":
    main()
