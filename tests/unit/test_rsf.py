import io

import pytest

from digital_register.model.entry import Entry, Region
from digital_register.register import MultiItemRegister, Register
from digital_register.rsf import (
    current_entries,
    read_rsf,
    register_name,
    replay,
    verify,
    write_rsf,
)
from digital_register.schema import Field
from digital_register.utils.hash import EMPTY_ROOT_HASH, hash_value

ITEM = '{"body-type":"NB","name":"Notified Body"}'
DIGEST = hash_value(ITEM)


def rsf(*lines):
    return io.StringIO("".join(line + "\n" for line in lines))


def body_types():
    register = Register()
    register.init(
        "body-type",
        "european-commission",
        "Types of body defined by NANDO.",
        Field("body-type", "string", "Unique abbreviation for the type of body."),
        Field("name", "string", "Full name of the body type."),
    )
    register.custodian("Simon Worthington")
    for key, name in [
        ("CAB", "Conformity Assessment Body"),
        ("NB", "Notified Body"),
        ("CAB", "Conformity assessment body"),
    ]:
        register.append_entry(Region.USER, key, {"body-type": key, "name": name})
    return register


def test_write_rsf():
    f = io.StringIO()
    entry = Entry(Region.USER, "NB", "2017-01-10T17:16:07Z", [DIGEST])
    write_rsf([entry], {DIGEST: ITEM}, f)
    assert f.getvalue() == (
        "assert-root-hash\t%s\n" % EMPTY_ROOT_HASH
        + "add-item\t%s\n" % ITEM
        + "append-entry\tuser\tNB\t2017-01-10T17:16:07Z\t%s\n" % DIGEST
    )


def test_read_rsf():
    commands = list(
        read_rsf(
            rsf(
                "assert-root-hash\t" + EMPTY_ROOT_HASH,
                "add-item\t" + ITEM,
                "append-entry\tuser\tNB\t2017-01-10T17:16:07Z\t" + DIGEST,
            )
        )
    )
    assert commands == [
        ("assert-root-hash", EMPTY_ROOT_HASH),
        ("add-item", ITEM),
        ("append-entry", Entry("user", "NB", "2017-01-10T17:16:07Z", [DIGEST])),
    ]


def test_read_rsf_unknown_command():
    with pytest.raises(ValueError):
        list(read_rsf(rsf("delete-entry\tuser\tNB")))


def test_read_rsf_short_entry():
    with pytest.raises(ValueError):
        list(read_rsf(rsf("append-entry\tuser\tNB")))


def test_replay_round_trip():
    register = body_types()
    f = io.StringIO()
    register.write_rsf(f)
    f.seek(0)

    entries, items = replay(f)
    assert [entry.triple for entry in entries] == [
        entry.triple for entry in register.entries
    ]
    assert register_name(entries, items) == "body-type"


def test_replay_multi_item_round_trip():
    register = MultiItemRegister()
    register.init("body", "european-commission", "", Field("body"), Field("name"))
    register.append_entry(Region.USER, "1", {"body": "1", "name": "a"})
    register.append_entry(Region.USER, "1", {"body": "1", "name": "b"})
    register.finish()

    f = io.StringIO()
    register.write_rsf(f)
    f.seek(0)
    entries, items = replay(f)
    assert [entry.triple for entry in entries] == [
        entry.triple for entry in register.entries
    ]
    assert len(entries[-1].digests) == 2


def test_replay_missing_item():
    with pytest.raises(ValueError):
        replay(
            rsf(
                "assert-root-hash\t" + EMPTY_ROOT_HASH,
                "append-entry\tuser\tNB\t2017-01-10T17:16:07Z\t" + DIGEST,
            )
        )


def test_verify_sound():
    f = io.StringIO()
    body_types().write_rsf(f)
    f.seek(0)
    assert verify(f) == []


def test_verify_problems():
    problems = verify(
        rsf(
            "assert-root-hash\tsha-256:0000",
            'add-item\t{"name": "Notified Body"}',
            "append-entry\tuser\tNB\t2017-01-10T17:16:07Z\t" + DIGEST,
        )
    )
    assert problems == [
        "unexpected root hash sha-256:0000",
        'item is not canonical: {"name": "Notified Body"}',
        "entry user NB names missing item %s" % DIGEST,
    ]


def test_verify_missing_root_hash():
    assert verify(rsf("add-item\t" + ITEM)) == [
        "add-item before the root hash",
    ]
    assert verify(io.StringIO("")) == ["missing root hash"]


def test_current_entries():
    register = body_types()
    current = current_entries(register.entries, Region.USER)
    assert [entry.key for entry in current] == ["NB", "CAB"]
    assert current[1] is register.entries[-1]


def test_current_entries_with_the_same_timestamp():
    timestamp = "2019-01-01T00:00:00Z"
    entries = [
        Entry(Region.USER, "NB", timestamp, [DIGEST]),
        Entry(Region.USER, "NB", timestamp, [hash_value("{}")]),
    ]
    assert current_entries(entries) == [entries[1]]
