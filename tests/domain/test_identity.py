import threading
import unittest

from tapegrad.domain._identity import IdAllocator, UniqueId, unique_id


class TestUniqueId(unittest.TestCase):

    def test_equality_and_hash_use_token_only(self) -> None:
        a = UniqueId(7)
        b = UniqueId(7)
        c = UniqueId(8)

        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, c)
        self.assertEqual(len({a, b, c}), 2)

    def test_is_frozen(self) -> None:
        a = UniqueId(1)
        with self.assertRaises(AttributeError):
            a.value = 2  # type: ignore[misc]

    def test_repr(self) -> None:
        self.assertEqual(repr(UniqueId(3)), "UniqueId(3)")


class TestIdAllocator(unittest.TestCase):

    def test_next_id_never_repeats(self) -> None:
        alloc = IdAllocator()
        ids = [alloc.next_id() for _ in range(1000)]
        self.assertEqual(len(set(ids)), 1000)

    def test_counter_is_monotonic_and_deterministic(self) -> None:
        alloc = IdAllocator(start=10)
        self.assertEqual(
            [alloc.next_id() for _ in range(3)],
            [UniqueId(10), UniqueId(11), UniqueId(12)],
        )

    def test_allocators_are_independent(self) -> None:
        a = IdAllocator()
        b = IdAllocator()
        self.assertEqual(a.next_id(), b.next_id())

    def test_unique_across_threads(self) -> None:
        alloc = IdAllocator()
        results: list[list[UniqueId]] = [[] for _ in range(8)]

        def worker(out: list[UniqueId]) -> None:
            for _ in range(500):
                out.append(alloc.next_id())

        threads = [threading.Thread(target=worker, args=(r,)) for r in results]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        flat = [i for r in results for i in r]
        self.assertEqual(len(flat), 8 * 500)
        self.assertEqual(len(set(flat)), 8 * 500)

    def test_default_allocator(self) -> None:
        a = unique_id()
        b = unique_id()
        self.assertIsInstance(a, UniqueId)
        self.assertNotEqual(a, b)

    def test_explicit_allocator(self) -> None:
        alloc = IdAllocator(start=1000)
        self.assertEqual(unique_id(alloc), UniqueId(1000))
        self.assertEqual(unique_id(alloc), UniqueId(1001))


if __name__ == "__main__":
    unittest.main()
