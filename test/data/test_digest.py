import io

import pytest

from dbdelta import data


def test_empty_binary_content():
    d = data.Digester().digest_bytes(b"")
    assert d.kind == "binary"
    assert d.length == 0
    assert d.hexdigest == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_text_length_is_counted_in_characters():
    d = data.Digester().digest_text("héllo")
    assert d.kind == "text"
    assert d.length == 5


def test_chunk_size_does_not_change_the_digest():
    content = b"0123456789" * 1000
    small = data.Digester(chunk_size=7).digest_bytes(content)
    large = data.Digester(chunk_size=1 << 16).digest_bytes(content)
    assert small == large


def test_other_algorithms():
    d = data.Digester(algorithm="sha256").digest_bytes(b"abc")
    assert d.hexdigest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_invalid_settings_are_rejected():
    with pytest.raises(data.UsageError):
        data.Digester(algorithm="no-such-algorithm")

    with pytest.raises(data.UsageError):
        data.Digester(chunk_size=0)


def test_stream_failure_raises_internal_error():
    class BrokenStream(io.RawIOBase):
        def read(self, size: int = -1) -> bytes:
            raise OSError("disk on fire")

    with pytest.raises(data.InternalError) as exc_info:
        data.Digester().digest_stream(BrokenStream())

    assert "disk on fire" in exc_info.value.error_message


def test_lob_that_cannot_be_opened_raises_internal_error(tmp_path):
    lob = data.Lob.from_file(tmp_path / "missing.bin")

    with pytest.raises(data.InternalError) as exc_info:
        data.to_value(lob, digester=data.Digester())

    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_variable_length_algorithms_are_rejected():
    with pytest.raises(data.UsageError):
        data.Digester(algorithm="shake_128")

    with pytest.raises(data.UsageError):
        data.Digester(algorithm="shake_256")
