import errno
import math
import os

import numpy as np
import pytest

from gramcost.artifacts.reader import GramModel, load_weight_array
from gramcost.building.bigram_table import pack_key
from gramcost.config import BuildConfig
from gramcost.errors import EmptyCorpusError, GramIOError
from gramcost.pipeline import GramBuilder, build_gram_artifacts


def _write_corpora(tmp_path, unigram="cat 3\ndog 1\n", bigram="cat dog 2\ndog fox 1\n"):
    unigram_path = tmp_path / "unigram.txt"
    bigram_path = tmp_path / "bigram.txt"
    unigram_path.write_text(unigram, encoding="utf-8")
    bigram_path.write_text(bigram, encoding="utf-8")
    return unigram_path, bigram_path


def test_cat_dog_scenario(tmp_path):
    unigram_path, bigram_path = _write_corpora(tmp_path)
    out = tmp_path / "model"
    report = build_gram_artifacts(unigram_path, bigram_path, BuildConfig(output_dir=out))

    assert report.vocab_size == 2
    assert report.bigrams_retained == 1
    assert report.bigrams_dropped == 1

    weights = load_weight_array(out / "unigram.bin")
    assert weights.dtype == np.dtype("<f4")
    assert weights.tolist()[0] == 0.0
    assert weights[1] == pytest.approx(-math.log(0.75), rel=1e-6)
    assert weights[2] == pytest.approx(-math.log(0.25), rel=1e-6)
    assert (out / "unigram.bin").stat().st_size == 3 * 4

    model = GramModel.load(out)
    assert model.term_id("cat") == 1
    assert model.term_id("dog") == 2
    assert model.term_id("fox") == 0
    assert model.unigram_cost("fox") == 0.0
    assert model.bigram_cost("cat", "dog") == pytest.approx(-math.log(2 / 3), rel=1e-6)
    assert model.bigram_cost("dog", "fox") is None
    assert len(model.bigrams) == 1
    assert pack_key(1, 2) in model.bigrams


def test_rebuild_is_byte_identical(tmp_path):
    unigram_path, bigram_path = _write_corpora(
        tmp_path,
        unigram="zebra 4\napple 2\nmango 9\napple 1\n",
        bigram="apple mango 3\nmango zebra 1\n",
    )
    first, second = tmp_path / "a", tmp_path / "b"
    build_gram_artifacts(unigram_path, bigram_path, BuildConfig(output_dir=first))
    build_gram_artifacts(unigram_path, bigram_path, BuildConfig(output_dir=second))
    for name in ("unigram.bin", "unigram.idx", "bigram.bin"):
        assert (first / name).read_bytes() == (second / name).read_bytes()


def test_empty_unigram_corpus_aborts_before_writing(tmp_path):
    unigram_path, bigram_path = _write_corpora(tmp_path, unigram="", bigram="")
    out = tmp_path / "model"
    builder = GramBuilder(BuildConfig(output_dir=out))
    builder.load(unigram_path, bigram_path)
    with pytest.raises(EmptyCorpusError):
        builder.build()
    assert not out.exists()


def test_empty_bigram_corpus_builds_empty_table(tmp_path):
    unigram_path, bigram_path = _write_corpora(tmp_path, bigram="")
    out = tmp_path / "model"
    report = build_gram_artifacts(unigram_path, bigram_path, BuildConfig(output_dir=out))
    assert report.bigrams_retained == 0
    assert len(GramModel.load(out).bigrams) == 0


def test_missing_bigram_file_stops_the_build(tmp_path):
    unigram_path, _ = _write_corpora(tmp_path)
    out = tmp_path / "model"
    with pytest.raises(GramIOError) as excinfo:
        build_gram_artifacts(unigram_path, tmp_path / "missing.txt", BuildConfig(output_dir=out))
    assert excinfo.value.path == tmp_path / "missing.txt"
    assert not out.exists()


def test_unwritable_index_names_the_artifact(tmp_path):
    unigram_path, bigram_path = _write_corpora(tmp_path)
    out = tmp_path / "model"
    out.mkdir()
    (out / "unigram.idx").mkdir()
    with pytest.raises(GramIOError) as excinfo:
        build_gram_artifacts(unigram_path, bigram_path, BuildConfig(output_dir=out))
    assert excinfo.value.path == out / "unigram.idx"
    assert "unigram index" in str(excinfo.value)
    assert os.strerror(errno.EISDIR) in str(excinfo.value)
    assert (out / "unigram.bin").exists()
    assert not (out / "bigram.bin").exists()


def test_build_before_load_is_an_error():
    with pytest.raises(RuntimeError):
        GramBuilder().build()


def test_unwritable_weight_array_stops_before_other_artifacts(tmp_path):
    unigram_path, bigram_path = _write_corpora(tmp_path)
    out = tmp_path / "model"
    out.mkdir()
    (out / "unigram.bin").mkdir()
    with pytest.raises(GramIOError) as excinfo:
        build_gram_artifacts(unigram_path, bigram_path, BuildConfig(output_dir=out))
    assert excinfo.value.path == out / "unigram.bin"
    assert os.strerror(errno.EISDIR) in str(excinfo.value)
    assert not (out / "unigram.idx").exists()
    assert not (out / "bigram.bin").exists()


def test_unwritable_bigram_table_keeps_earlier_artifacts(tmp_path):
    unigram_path, bigram_path = _write_corpora(tmp_path)
    out = tmp_path / "model"
    out.mkdir()
    (out / "bigram.bin").mkdir()
    with pytest.raises(GramIOError) as excinfo:
        build_gram_artifacts(unigram_path, bigram_path, BuildConfig(output_dir=out))
    assert excinfo.value.path == out / "bigram.bin"
    assert (out / "unigram.bin").is_file()
    assert (out / "unigram.idx").is_file()


def test_unigram_read_failure_skips_bigram_stage(tmp_path, monkeypatch):
    _, bigram_path = _write_corpora(tmp_path)
    calls = []
    monkeypatch.setattr(
        "gramcost.pipeline.read_bigram_counts",
        lambda *args, **kwargs: calls.append(args),
    )
    builder = GramBuilder(BuildConfig(output_dir=tmp_path / "model"))
    with pytest.raises(GramIOError):
        builder.load(tmp_path / "missing.txt", bigram_path)
    assert calls == []
    assert builder.bigrams is None
