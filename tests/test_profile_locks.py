import threading
import time

from lead_images.infrastructure.locking.memory_profile_locks import InMemoryProfileLocks


def test_same_profile_is_serialized():
    locks = InMemoryProfileLocks()
    events = []

    def worker(name):
        with locks.hold(1):
            events.append(f"{name}-in")
            time.sleep(0.05)
            events.append(f"{name}-out")

    threads = [threading.Thread(target=worker, args=(n,)) for n in ("a", "b")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    # Each holder leaves before the next one enters
    assert events[0][0] == events[1][0]
    assert events[2][0] == events[3][0]


def test_different_profiles_do_not_block():
    locks = InMemoryProfileLocks()
    with locks.hold(1):
        acquired = threading.Event()

        def other():
            with locks.hold(2):
                acquired.set()

        t = threading.Thread(target=other)
        t.start()
        assert acquired.wait(timeout=1) is True
        t.join()


def test_lock_is_reused_per_profile():
    locks = InMemoryProfileLocks()
    assert locks._lock_for(3) is locks._lock_for(3)
    assert locks._lock_for(3) is not locks._lock_for(4)


def test_released_locks_are_dropped():
    locks = InMemoryProfileLocks()
    with locks.hold(5):
        assert 5 in locks._locks
    assert 5 not in locks._locks
