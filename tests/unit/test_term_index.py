import math

import numpy as np
import pytest

from gramcost.building.term_index import OOV_ID, TermIndex, build_term_index


def test_ids_follow_ascending_term_order():
    weights = {"dog": 1.0, "cat": 2.0, "ant": 3.0, "bee": 4.0}
    index, array = build_term_index(weights)
    ids = dict(index.items())
    assert ids == {"ant": 1, "bee": 2, "cat": 3, "dog": 4}
    terms = sorted(ids)
    assert all(ids[a] < ids[b] for a, b in zip(terms, terms[1:]))
    assert OOV_ID not in ids.values()
    assert len(set(ids.values())) == len(weights)


def test_weight_array_layout():
    weights = {"cat": -math.log(0.75), "dog": -math.log(0.25)}
    index, array = build_term_index(weights)
    assert array.dtype == np.float32
    assert len(array) == len(weights) + 1
    assert array[0] == 0.0
    assert array[index.get("cat")] == pytest.approx(0.2877, abs=1e-4)
    assert array[index.get("dog")] == pytest.approx(1.3863, abs=1e-4)


def test_put_rejects_bad_ids_and_duplicates():
    index = TermIndex()
    index.put("a", 1)
    with pytest.raises(ValueError):
        index.put("b", 0)
    with pytest.raises(ValueError):
        index.put("a", 2)
    with pytest.raises(ValueError):
        index.put("c", 1)
    assert index.get("missing") == -1
    assert index.get("missing", 0) == 0


def test_save_load_round_trip(tmp_path):
    index, _ = build_term_index({"x": 1.0, "y": 2.0})
    path = tmp_path / "unigram.idx"
    index.save(path)
    loaded = TermIndex.load(path)
    assert dict(loaded.items()) == {"x": 1, "y": 2}
    with pytest.raises(ValueError):
        loaded.put("z", 2)
