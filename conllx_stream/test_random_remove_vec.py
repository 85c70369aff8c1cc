"""
Tests for RandomRemoveVec

Run with:
    pytest conllx_stream/test_random_remove_vec.py
"""

import random

from conllx_stream.random_remove_vec import RandomRemoveVec


class ScriptedRandom(random.Random):
    """Generator returning predefined indices and recording the ranges asked for"""

    def __init__(self, indices):
        super().__init__(0)
        self.indices = list(indices)
        self.bounds = []

    def randrange(self, start, stop=None, step=1):
        assert stop is None, "only randrange(n) is expected"
        self.bounds.append(start)
        return self.indices.pop(0)


def test_random_remove_vec_scripted():
    """Exact removals for a known sequence of draws"""
    rng = ScriptedRandom([1, 2, 1, 1, 0, 0, 0, 0])
    elems = RandomRemoveVec.with_capacity(3, rng)
    elems.push(1)
    elems.push(2)
    elems.push(3)

    # Before: [1 2 3]
    assert elems.push_and_remove_random(4) == 2
    assert elems._inner == [1, 4, 3]

    # Before: [1 4 3]
    assert elems.push_and_remove_random(5) == 3
    assert elems._inner == [1, 4, 5]

    # Before: [1 4 5]
    assert elems.push_and_remove_random(6) == 4
    assert elems._inner == [1, 6, 5]

    # Before: [1 6 5]
    assert elems.remove_random() == 6
    assert elems._inner == [1, 5]

    # Before: [1 5]
    assert elems.remove_random() == 1

    # Before: [5]
    assert elems.remove_random() == 5

    # Exhausted, no draw is made
    assert elems.remove_random() is None
    assert elems.is_empty()

    # The buffer is empty, so always return the next number
    assert elems.push_and_remove_random(7) == 7
    assert elems.push_and_remove_random(8) == 8

    assert rng.bounds == [4, 4, 4, 3, 2, 1, 1, 1]
    print("[OK] Scripted removals match")


def test_random_remove_vec_seeded():
    """A second generator with the same seed predicts every removal"""
    reference = random.Random(42)
    elems = RandomRemoveVec.with_capacity(3, random.Random(42))
    model = []

    def model_remove(index):
        model[index], model[-1] = model[-1], model[index]
        return model.pop()

    for value in (1, 2, 3):
        elems.push(value)
        model.append(value)

    for value in (4, 5, 6):
        model.append(value)
        expected = model_remove(reference.randrange(len(model)))
        assert elems.push_and_remove_random(value) == expected
        assert len(elems) == 3

    while model:
        expected = model_remove(reference.randrange(len(model)))
        assert elems.remove_random() == expected

    assert elems.remove_random() is None
    assert elems.push_and_remove_random(7) == 7
    print("[OK] Seeded removals reproducible")


def test_random_remove_vec_len():
    elems = RandomRemoveVec.with_capacity(2, random.Random(0))
    assert elems.capacity == 3
    assert elems.is_empty()
    assert elems.len() == 0

    elems.push("a")
    elems.push("b")
    assert elems.len() == 2
    assert not elems.is_empty()

    removed = elems.push_and_remove_random("c")
    assert removed in ("a", "b", "c")
    assert len(elems) == 2
    assert sorted(elems._inner + [removed]) == ["a", "b", "c"]

    elems.remove_random()
    assert len(elems) == 1


if __name__ == "__main__":
    test_random_remove_vec_scripted()
    test_random_remove_vec_seeded()
    test_random_remove_vec_len()
    print("[PASS] RandomRemoveVec tests passed!")
