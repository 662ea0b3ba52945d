import math

import pytest

from gramcost.building.aggregate import FrequencyTable
from gramcost.building.weights import compute_weights, neg_log_weight
from gramcost.errors import EmptyCorpusError, UsageError


def test_neg_log_weight_form():
    assert neg_log_weight(3, 4) == pytest.approx(-math.log(0.75))
    assert neg_log_weight(1, 4) == pytest.approx(1.3862943611)


def test_weights_reconstruct_frequency_ratios():
    table = FrequencyTable()
    for key, count in [("a", 5), ("b", 3), ("c", 2), ("a", 10)]:
        table.add(key, count)
    weights = compute_weights(table)
    assert sum(math.exp(-w) for w in weights.values()) == pytest.approx(1.0)
    for key, count in table.counts.items():
        assert math.exp(-weights[key]) == pytest.approx(count / table.total)


def test_higher_count_means_lower_weight():
    table = FrequencyTable()
    table.add("common", 90)
    table.add("rare", 10)
    weights = compute_weights(table)
    assert weights["common"] < weights["rare"]


def test_empty_corpus_is_a_usage_error():
    with pytest.raises(EmptyCorpusError):
        compute_weights(FrequencyTable())
    with pytest.raises(UsageError):
        neg_log_weight(1, 0)


def test_zero_count_costs_infinity():
    assert neg_log_weight(0, 10) == math.inf
