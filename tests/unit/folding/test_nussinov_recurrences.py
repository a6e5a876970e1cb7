"""
Unit tests for the Nussinov score matrix fill.

This module drives `NussinovFoldingEngine.fill_matrix` on small sequences
whose optimal pair counts can be worked out by hand, and checks both fill
orders: the bottom-up pass that computes every non-trivial window and the
memoized pass that computes only windows reachable from (0, N-1).
"""
import pytest

from rna_nussinov_fold.folding.nussinov_fold_state import make_fold_state
from rna_nussinov_fold.folding.nussinov_recurrences import (
    NussinovFoldingConfig,
    NussinovFoldingEngine,
)


# ---------------------- Fixtures ----------------------
@pytest.fixture(params=["bottom_up", "memoized"])
def fill_order(request):
    """Runs a test once per fill strategy."""
    return request.param


@pytest.fixture
def fold_factory(fill_order):
    """
    Provides a helper that allocates a state and fills it for a sequence.
    """
    def fold(seq, min_loop_length=4):
        config = NussinovFoldingConfig(min_loop_length=min_loop_length, fill_order=fill_order)
        state = make_fold_state(len(seq), min_loop_length=min_loop_length)
        NussinovFoldingEngine(config=config).fill_matrix(seq, state)
        return state

    return fold


# ----------------------------- Tests ---------------------------------
def test_config_defaults():
    """
    The default configuration uses a loop length of 4 and a bottom-up fill.
    """
    config = NussinovFoldingConfig()
    assert config.min_loop_length == 4
    assert config.fill_order == "bottom_up"
    assert config.verbose is False


@pytest.mark.parametrize("kwargs", [{"min_loop_length": -1}, {"fill_order": "sideways"}])
def test_config_rejects_invalid_values(kwargs):
    """
    Negative loop lengths and unknown fill orders are configuration errors.
    """
    with pytest.raises(ValueError):
        NussinovFoldingConfig(**kwargs)


def test_fill_empty_sequence_is_a_no_op(fold_factory):
    """
    An empty sequence has nothing to fill and scores 0.
    """
    state = fold_factory("")
    assert state.total_score == 0


@pytest.mark.parametrize("seq", ["A", "AUGC", "GAAAC"])
def test_short_sequences_score_zero(fold_factory, seq):
    """
    Sequences of length <= min_loop_length + 1 cannot hold a pair.
    """
    state = fold_factory(seq)
    assert state.total_score == 0
    assert state.computed_cells() == 0


def test_single_pair_at_minimum_span(fold_factory):
    """
    "AAAAAU": positions 0 and 5 are complementary and 5 - 0 > 4, so the
    optimal score is 1.
    """
    state = fold_factory("AAAAAU")
    assert state.total_score == 1


def test_no_complementary_bases_scores_zero(fold_factory):
    """
    A homopolymer has no complementary pair at any distance.
    """
    state = fold_factory("AAAAAAA")
    assert state.total_score == 0


def test_nested_helix_scores(fold_factory):
    """
    "GGGAAAUCCC" folds into three nested G-C pairs. Intermediate windows
    carry the scores the traceback relies on.
    """
    state = fold_factory("GGGAAAUCCC")

    assert state.score(0, 9) == 3
    assert state.score(0, 8) == 2
    assert state.score(1, 8) == 2
    assert state.score(2, 7) == 1
    # (2, 6) is a trivial window.
    assert state.score(2, 6) == 0


def test_two_disjoint_hairpins(fold_factory):
    """
    Two independent hairpins side by side both count.
    """
    state = fold_factory("GAAAAC" + "AAAAAU")
    assert state.total_score == 2


def test_smaller_loop_length_allows_more_pairs(fold_factory):
    """
    The loop length is a parameter: "GAAAC" pairs once min_loop_length is 3.
    """
    assert fold_factory("GAAAC", min_loop_length=4).total_score == 0
    assert fold_factory("GAAAC", min_loop_length=3).total_score == 1
    assert fold_factory("AU", min_loop_length=0).total_score == 1


def test_scores_are_non_decreasing_in_j(fold_factory, fill_order):
    """
    For a fixed i, extending the window to the right never lowers the score.
    """
    seq = "GGGAAAUCCCAGCUAAAGCUU"
    state = fold_factory(seq)

    for i in range(len(seq)):
        previous = 0
        for j in range(i, len(seq)):
            if not state.is_computed(i, j):
                continue
            current = state.score(i, j)
            assert current >= previous
            previous = current


def test_memoized_fill_computes_a_subset():
    """
    The memoized fill only computes windows reachable from (0, N-1).

    For "AAAAAAA" the recurrence only reads (0, 5) from (0, 6): there is no
    complementary partner, so (1, 6) is never requested.
    """
    seq = "AAAAAAA"

    memo_state = make_fold_state(len(seq))
    NussinovFoldingEngine(NussinovFoldingConfig(fill_order="memoized")).fill_matrix(seq, memo_state)

    full_state = make_fold_state(len(seq))
    NussinovFoldingEngine(NussinovFoldingConfig(fill_order="bottom_up")).fill_matrix(seq, full_state)

    assert memo_state.computed_cells() == 2
    assert full_state.computed_cells() == 3
    assert not memo_state.is_computed(1, 6)
    assert memo_state.total_score == full_state.total_score == 0


def test_fill_orders_agree_on_every_shared_cell():
    """
    Every window computed by both fill orders holds the same score.
    """
    seq = "GGCAUAGCAAUCGAUGCGAUUAGCCA"

    memo_state = make_fold_state(len(seq))
    NussinovFoldingEngine(NussinovFoldingConfig(fill_order="memoized")).fill_matrix(seq, memo_state)
    full_state = make_fold_state(len(seq))
    NussinovFoldingEngine(NussinovFoldingConfig(fill_order="bottom_up")).fill_matrix(seq, full_state)

    for i, j in memo_state.score_matrix.iter_upper_indices():
        if memo_state.is_computed(i, j):
            assert memo_state.score(i, j) == full_state.score(i, j)


def test_memoized_fill_handles_long_sequences_without_recursion():
    """
    The memoized fill uses an explicit stack, so a dependency chain deeper
    than the default recursion limit fills without `RecursionError`.

    A homopolymer has no partners, so (0, j) depends only on (0, j-1) and the
    chain is as deep as the sequence is long.
    """
    seq = "A" * 1500
    state = make_fold_state(len(seq))
    NussinovFoldingEngine(NussinovFoldingConfig(fill_order="memoized")).fill_matrix(seq, state)

    assert state.total_score == 0
    assert state.is_computed(0, 1499)
    assert state.is_computed(0, 5)
    assert not state.is_computed(1, 1499)


def test_state_length_mismatch_raises():
    """
    A state allocated for another sequence length is rejected.
    """
    with pytest.raises(ValueError):
        NussinovFoldingEngine().fill_matrix("GGGAAAUCCC", make_fold_state(5))


def test_state_loop_length_mismatch_raises():
    """
    The state and the engine must agree on the minimum loop length.
    """
    engine = NussinovFoldingEngine(NussinovFoldingConfig(min_loop_length=3))
    with pytest.raises(ValueError):
        engine.fill_matrix("GGGAAAUCCC", make_fold_state(10, min_loop_length=4))
