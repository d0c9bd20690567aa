import threading
import unittest

from letterpuzzle.engine.recency import RecencyCache


class RecencyCacheTests(unittest.TestCase):
    def test_record_and_is_fresh(self) -> None:
        cache = RecencyCache(capacity=3)
        self.assertTrue(cache.is_fresh(5, "AEKLM"))
        cache.record(5, "AEKLM")
        self.assertFalse(cache.is_fresh(5, "AEKLM"))
        # difficulties are tracked separately
        self.assertTrue(cache.is_fresh(4, "AEKLM"))

    def test_oldest_entry_is_evicted(self) -> None:
        cache = RecencyCache(capacity=2)
        for seed in ("A", "B", "C"):
            cache.record(5, seed)
        self.assertTrue(cache.is_fresh(5, "A"))
        self.assertEqual(cache.snapshot(5), ["B", "C"])

    def test_re_recording_refreshes_position(self) -> None:
        cache = RecencyCache(capacity=2)
        cache.record(5, "A")
        cache.record(5, "B")
        cache.record(5, "A")
        cache.record(5, "C")
        self.assertEqual(cache.snapshot(5), ["A", "C"])

    def test_reset_one_or_all(self) -> None:
        cache = RecencyCache()
        cache.record(4, "ABCD")
        cache.record(5, "ABCDE")
        cache.reset(4)
        self.assertEqual(cache.size(4), 0)
        self.assertEqual(cache.size(5), 1)
        cache.reset()
        self.assertEqual(cache.size(5), 0)

    def test_invalid_capacity(self) -> None:
        with self.assertRaises(ValueError):
            RecencyCache(capacity=0)

    def test_concurrent_records_stay_bounded(self) -> None:
        cache = RecencyCache(capacity=16)

        def worker(offset: int) -> None:
            for i in range(200):
                cache.record(6, f"S{offset}-{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(cache.size(6), 16)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
