import threading
import time

from storefront.shared.locks import KeyedLocks, cart_key, product_key


def test_keys_are_namespaced():
    assert cart_key("c-1") == "cart:c-1"
    assert product_key("p-1") == "product:p-1"
    # Cart keys always sort before product keys
    assert sorted([product_key("a"), cart_key("z")]) == ["cart:z", "product:a"]


def test_same_key_holders_are_serialized():
    locks = KeyedLocks()
    inside = []
    overlaps = []

    def worker():
        with locks.hold("product:p-1"):
            if inside:
                overlaps.append(True)
            inside.append(True)
            time.sleep(0.01)
            inside.pop()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert overlaps == []


def test_hold_is_reentrant():
    locks = KeyedLocks()
    with locks.hold("cart:c-1"):
        with locks.hold("cart:c-1", "product:p-1"):
            pass


def test_opposite_key_orders_do_not_deadlock():
    locks = KeyedLocks()
    done = []

    def worker(keys):
        for _ in range(50):
            with locks.hold(*keys):
                pass
        done.append(keys)

    first = threading.Thread(target=worker, args=(("product:a", "product:b"),))
    second = threading.Thread(target=worker, args=(("product:b", "product:a"),))
    first.start()
    second.start()
    first.join(timeout=5)
    second.join(timeout=5)

    assert len(done) == 2
