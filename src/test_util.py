import hashlib

import pytest

from valkeyfips import util
from valkeyfips.exceptions import CommandTimeout, MissingArtifact
from valkeyfips.models import FailureReason


def test_parse_version():
    assert util.parse_version("6.8.0-45-generic") == (6, 8, 0, 45)
    assert util.parse_version("5.15.153.1-microsoft-standard-WSL2") == (5, 15, 153, 1)
    assert util.parse_version("6.8") > util.parse_version("5.19.17")


def test_read_cpu_flags(tmp_path):
    cpuinfo = tmp_path / "cpuinfo"
    cpuinfo.write_text("processor\t: 0\nflags\t\t: fpu aes rdrand\n")
    assert util.read_cpu_flags(str(cpuinfo)) == {"fpu", "aes", "rdrand"}
    cpuinfo.write_text("processor\t: 0\nFeatures\t: fp asimd aes sha2\n")
    assert "aes" in util.read_cpu_flags(str(cpuinfo))
    assert util.read_cpu_flags(str(tmp_path / "missing")) is None


def test_sha256_file(tmp_path):
    content = b"\x00" * 200000
    lib = tmp_path / "libcrypto.so.3"
    lib.write_bytes(content)
    assert util.sha256_file(str(lib)) == hashlib.sha256(content).hexdigest()


def test_first_line():
    assert util.first_line("\n  OpenSSL 3.0.15\nsecond\n") == "OpenSSL 3.0.15"
    assert util.first_line("") == ""
    assert util.first_line(None) == ""


def test_run_command_timeout():
    with pytest.raises(CommandTimeout) as err:
        util.run_command(["sleep", "5"], timeout=0.2)
    assert err.value.reason == FailureReason.TIMEOUT


def test_run_command_missing(tmp_path):
    with pytest.raises(MissingArtifact):
        util.run_command([str(tmp_path / "nope")], timeout=1)


def test_run_command_nonzero_is_returned(make_script, tmp_path):
    script = make_script(tmp_path / "tool", "echo out; echo err >&2; exit 4")
    proc = util.run_command([str(script)], timeout=5)
    assert proc.returncode == 4
    assert proc.stdout.strip() == "out"
    assert proc.stderr.strip() == "err"
