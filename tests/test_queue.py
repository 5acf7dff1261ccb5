from wokkibot.queue import Queue, QueueManager


def test_next_returns_tracks_in_order():
    queue = Queue()
    queue.add("a", "b")
    queue.add("c")
    assert [queue.next(), queue.next(), queue.next()] == ["a", "b", "c"]
    assert len(queue) == 0


def test_next_on_empty_queue_returns_none():
    assert Queue().next() is None


def test_skip_drops_front_and_returns_new_front():
    queue = Queue()
    queue.add("a", "b", "c")
    assert queue.skip() == "b"
    assert list(queue) == ["b", "c"]


def test_skip_last_track_returns_none_and_empties():
    queue = Queue()
    queue.add("a")
    assert queue.skip() is None
    assert len(queue) == 0


def test_skip_on_empty_queue_returns_none():
    assert Queue().skip() is None


def test_clear_empties_queue():
    queue = Queue()
    queue.add("a", "b")
    queue.clear()
    assert list(queue) == []


def test_manager_returns_same_queue_per_guild():
    manager = QueueManager()
    first = manager.get(1)
    first.add("x")
    assert manager.get(1) is first
    assert len(manager.get(2)) == 0


def test_manager_delete_starts_fresh_queue():
    manager = QueueManager()
    manager.get(1).add("x")
    manager.delete(1)
    assert len(manager.get(1)) == 0
    manager.delete(99)
    assert len(manager.get(99)) == 0