from hypothesis import given
from hypothesis import strategies as st

from autocomplete.utils.hashable import HashedSeq, Signature

param_values = st.one_of(st.integers(), st.text(), st.booleans(), st.none())
params_strategy = st.dictionaries(st.text(min_size=1), param_values, max_size=5)


@given(text=st.text(), params=params_strategy)
def test_parameter_order_is_irrelevant(text: str, params: dict[str, object]) -> None:
    """Tests that the same parameters passed in any order produce the same key."""
    forward = Signature.of("search", text, **params)  # type: ignore[arg-type]
    backward = Signature.of("search", text, **dict(reversed(params.items())))  # type: ignore[arg-type]

    assert forward == backward
    assert hash(forward) == hash(backward)
    assert forward.params == params


def test_distinguishes_every_part() -> None:
    base = Signature.of("search", "ma", offset=0, limit=None)
    assert base != Signature.of("search", "ma", offset=1, limit=None)
    assert base != Signature.of("search", "ma", offset=0, limit=0)
    assert base != Signature.of("search", "mag", offset=0, limit=None)
    assert base != Signature.of("exists", "ma", offset=0, limit=None)
    assert base != Signature.of("search", "ma", offset=0)


def test_accessors() -> None:
    key = Signature.of("exists", "magic", casefold=True)
    assert key.kind == "exists"
    assert key.text == "magic"
    assert key.params == {"casefold": True}


def test_usable_as_dict_key() -> None:
    mapping = {Signature.of("search", "ma", limit=5): "cached"}
    assert mapping[Signature.of("search", "ma", limit=5)] == "cached"


def test_plain_sequence_never_equals_signature() -> None:
    key = Signature.of("search", "ma")
    plain = HashedSeq(key)
    assert plain != key
    assert not plain == key  # noqa: SIM201
    assert key != list(key)
    assert not key != Signature.of("search", "ma")  # noqa: SIM202
    assert hash(plain) == hash(key)
