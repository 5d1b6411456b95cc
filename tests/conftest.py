import pytest

import segtrie.dictionary as dictionary


@pytest.fixture
def write_dict(tmp_path):
    """Write dictionary lines (str or raw bytes) to a file and return its path."""
    def _write(lines, name="dict.txt"):
        path = tmp_path / name
        data = b""
        for line in lines:
            if isinstance(line, str):
                line = line.encode("utf-8")
            data += line + b"\n"
        path.write_bytes(data)
        return path
    return _write


@pytest.fixture
def abc_dict(write_dict):
    return write_dict(["a 5 x", "ab 3 y", "abc 1 z"])


@pytest.fixture(params=["nodes", "marisa"])
def backend(request):
    return request.param


@pytest.fixture(autouse=True)
def _reset_dictionary():
    yield
    dictionary.unload_dictionary()
