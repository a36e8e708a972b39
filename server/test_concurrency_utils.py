import threading

from concurrency_utils import atomic, atomic_many, get_lock


def test_get_lock_is_stable_per_name():
    assert get_lock('world') is get_lock('world')
    assert get_lock('world') is not get_lock('sessions')


def test_atomic_releases_on_error():
    try:
        with atomic('test-release'):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    acquired = get_lock('test-release').acquire(blocking=False)
    assert acquired
    get_lock('test-release').release()


def test_atomic_many_accepts_duplicates_and_any_order():
    with atomic_many(['b', 'a', 'b']):
        pass
    with atomic_many(['a', 'b']):
        pass


def test_atomic_serialises_threads():
    counter = {'value': 0}

    def bump():
        for _ in range(1000):
            with atomic('test-counter'):
                current = counter['value']
                counter['value'] = current + 1

    threads = [threading.Thread(target=bump) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter['value'] == 4000


def test_lock_is_held_inside_block():
    seen = []

    def contend():
        lk = get_lock('test-held')
        got = lk.acquire(blocking=False)
        seen.append(got)
        if got:
            lk.release()

    with atomic('test-held'):
        t = threading.Thread(target=contend)
        t.start()
        t.join()
    assert seen == [False]
