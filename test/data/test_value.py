import decimal

import pytest

from dbdelta import data

_DIGESTER = data.Digester()


def _row(*values):
    return data.Row.of(values, digester=_DIGESTER)


def test_null_equals_null():
    assert data.to_value(None, digester=_DIGESTER) is data.NULL
    assert data.values_equal(data.NULL, data.NULL)
    assert _row(None, 1) == _row(None, 1)


def test_null_never_equals_a_non_null_value():
    for v in (0, "", b"", False):
        assert not data.values_equal(data.NULL, data.to_value(v, digester=_DIGESTER))
        assert not data.values_equal(data.to_value(v, digester=_DIGESTER), data.NULL)
        assert _row(None) != _row(v)


def test_nan_equals_itself():
    assert _row(float("nan")) == _row(float("nan"))
    assert _row(decimal.Decimal("NaN")) == _row(float("nan"))
    assert hash(_row(float("nan"))) == hash(_row(float("nan")))


def test_containers_are_normalized():
    assert _row([1, 2], {"a": [3]}) == _row((1, 2), {"a": (3,)})
    assert _row(bytearray(b"ab")) == _row(b"ab")
    assert _row({1, 2}) == _row(frozenset({2, 1}))
    assert _row([1, 2]) != _row([2, 1])


def test_unhashable_values_are_rejected():
    class Unhashable:
        __hash__ = None  # type: ignore[assignment]

    with pytest.raises(data.UsageError):
        data.to_value(Unhashable(), digester=_DIGESTER)


def test_lob_values_are_compared_by_digest():
    a = data.to_value(data.Lob.from_bytes(b"abc"), digester=_DIGESTER)
    b = data.to_value(data.Lob.from_bytes(b"abc"), digester=_DIGESTER)
    assert isinstance(a, data.Digest)
    assert a.kind == "binary"
    assert a.length == 3
    assert data.values_equal(a, b)


def test_binary_and_text_lobs_with_same_content_differ():
    binary = data.to_value(data.Lob.from_bytes(b"abc"), digester=_DIGESTER)
    text = data.to_value(data.Lob.from_text("abc"), digester=_DIGESTER)
    assert not data.values_equal(binary, text)


def test_large_content_differing_in_one_byte_is_unequal():
    content = bytes(range(256)) * 4096
    changed = bytearray(content)
    changed[len(changed) // 2] ^= 0xFF

    a = data.to_value(data.Lob.from_bytes(content), digester=_DIGESTER)
    b = data.to_value(data.Lob.from_bytes(bytes(changed)), digester=_DIGESTER)
    c = data.to_value(data.Lob.from_bytes(content), digester=_DIGESTER)

    assert not data.values_equal(a, b)
    assert data.values_equal(a, c)


def test_large_object_columns_digest_plain_content():
    blob = data.to_value(b"\x00\x01", digester=_DIGESTER, data_type=data.DataType.Blob)
    clob = data.to_value("héllo", digester=_DIGESTER, data_type=data.DataType.Clob)
    text = data.to_value("héllo", digester=_DIGESTER, data_type=data.DataType.Text)

    assert isinstance(blob, data.Digest) and blob.length == 2
    assert isinstance(clob, data.Digest) and clob.length == 5 and clob.kind == "text"
    assert isinstance(text, data.Scalar)


def test_lob_from_file(tmp_path):
    path = tmp_path / "content.bin"
    path.write_bytes(b"x" * 10_000)

    from_file = data.to_value(data.Lob.from_file(path), digester=_DIGESTER)
    from_bytes = data.to_value(data.Lob.from_bytes(b"x" * 10_000), digester=_DIGESTER)

    assert data.values_equal(from_file, from_bytes)


def test_row_rejects_raw_values():
    with pytest.raises(data.UsageError):
        data.Row([1, 2])  # type: ignore[list-item]


def test_row_is_immutable():
    row = _row(1)
    with pytest.raises(AttributeError):
        row.foo = 1  # type: ignore[attr-defined]


def test_row_of_checks_data_type_count():
    with pytest.raises(data.UsageError):
        data.Row.of((1, 2), digester=_DIGESTER, data_types=(data.DataType.Int,))


def test_digest_repr_does_not_name_an_algorithm():
    d = data.to_value(b"abc", digester=data.Digester(algorithm="sha256"), data_type=data.DataType.Blob)

    assert repr(d) == "binary(digest=ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad, length=3)"
