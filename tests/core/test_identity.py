"""Tests for participant identity and the member codec.

Critical Invariants:
- Encoding preserves slot order
- Decoding keeps durable ids for unresolvable slots, in place
- Only Participants and plain ints are member slots
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from partykit.core.identity import (
    Participant,
    ProcessContext,
    decode_members,
    encode_members,
    is_live,
    user_id_of,
)


def test_user_id_of_accepts_handles_and_ids():
    assert user_id_of(Participant(5, "eve")) == 5
    assert user_id_of(5) == 5


@pytest.mark.parametrize("bad", ["5", 5.0, True, None, object()])
def test_user_id_of_rejects_other_values(bad):
    with pytest.raises(TypeError):
        user_id_of(bad)


def test_encode_keeps_join_order():
    members = [Participant(3, "c"), Participant(1, "a"), 2]
    assert encode_members(members) == [3, 1, 2]


def test_decode_leaves_unknown_ids_in_their_slot():
    online = {1: Participant(1, "a"), 3: Participant(3, "c")}

    decoded = decode_members([1, 2, 3], online.get)

    assert decoded == [online[1], 2, online[3]]
    assert [is_live(m) for m in decoded] == [True, False, True]


@given(st.lists(st.integers(min_value=1, max_value=10_000), unique=True))
def test_decode_inverts_encode_when_everyone_is_online(user_ids):
    """PROPERTY: encode(decode(ids)) == ids when every id resolves."""
    online = {uid: Participant(uid, f"p{uid}") for uid in user_ids}

    decoded = decode_members(user_ids, online.get)

    assert decoded == [online[uid] for uid in user_ids]
    assert encode_members(decoded) == user_ids


def test_process_context_reserved_flag():
    assert not ProcessContext().is_reserved
    assert ProcessContext(private_id="abc").is_reserved
    assert ProcessContext().is_authority
