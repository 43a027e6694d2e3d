from __future__ import annotations

import threading
from datetime import date, timedelta

from src.attendly.attendly.settings.reducers import add_holiday
from src.attendly.attendly.store.store import Store


def test_unchanged_state_does_not_notify_listeners():
    store = Store()
    seen = []
    store.subscribe(seen.append)

    store.apply(add_holiday, date(2024, 5, 1))
    store.apply(add_holiday, date(2024, 5, 1))

    assert len(seen) == 1


def test_concurrent_transitions_are_all_kept():
    store = Store()
    first = date(2024, 1, 1)
    days = [first + timedelta(days=i) for i in range(4000)]
    chunks = [days[i::8] for i in range(8)]
    commits = []
    store.subscribe(lambda state: commits.append(len(state.holidays)))

    def add_all(chunk):
        for day in chunk:
            store.apply(add_holiday, day)

    threads = [threading.Thread(target=add_all, args=(chunk,)) for chunk in chunks]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store.state.holidays) == 4000
    assert commits == list(range(1, 4001))


def test_listener_may_replace_state_while_notified():
    store = Store()
    replaced = Store().state

    def listener(state):
        if state is not replaced:
            store.replace(replaced)

    store.subscribe(listener)
    store.apply(add_holiday, date(2024, 5, 1))

    assert store.state is replaced
