import io
import os
import platform
import stat

import pytest
import yaml
from rich.console import Console

from valkeyfips.config import get_config

OPENSSL_VERSION = "OpenSSL 3.0.15 3 Sep 2024 (Library: OpenSSL 3.0.15 3 Sep 2024)"
PROVIDER_LISTING = """Providers:
  libwolfprov
    name: wolfSSL Provider
    version: 1.0.2
    status: active
"""


class ExecCalled(Exception):
    def __init__(self, path, argv):
        super().__init__(path)
        self.path = path
        self.argv = argv


def _write_script(path, body: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def make_script():
    return _write_script


@pytest.fixture
def fips_root(tmp_path):
    root = tmp_path / "image"
    openssl_bin = _write_script(
        root / "openssl" / "bin" / "openssl",
        f"""case "$1" in
  version) echo "{OPENSSL_VERSION}" ;;
  list) cat <<'EOF'
{PROVIDER_LISTING}EOF
  ;;
  *) echo "unknown command $1" >&2; exit 2 ;;
esac""",
    )
    sentinel = root / "self-test-ran"
    self_test_bin = _write_script(
        root / "bin" / "fips-startup-check",
        f"""echo "wolfSSL FIPS self-test: CAST passed"
echo "FIPS mode: enabled"
: > "{sentinel}"
exit ${{FAKE_SELF_TEST_EXIT:-0}}""",
    )
    entrypoint = _write_script(root / "scripts" / "entrypoint.sh", 'exec "$@"')

    lib_dir = root / "lib"
    lib_dir.mkdir(parents=True)
    (lib_dir / "libwolfssl.so.44").write_bytes(b"\x7fELF wolfssl fips")
    modules_dir = root / "ossl-modules"
    modules_dir.mkdir()
    (modules_dir / "libwolfprov.so").write_bytes(b"\x7fELF wolfprov" * 16)
    openssl_conf = root / "openssl.cnf"
    openssl_conf.write_text(
        "openssl_conf = openssl_init\n[openssl_init]\nproviders = provider_sect\n",
        encoding="utf8",
    )

    reference_dir = root / "openssl" / "lib64"
    reference_dir.mkdir(parents=True)
    system_dir = root / "usr-lib"
    system_dir.mkdir()
    alias_dir = root / "lib-alias"
    alias_dir.mkdir()
    for name, content in [
        ("libssl.so.3", b"\x7fELF fips libssl"),
        ("libcrypto.so.3", b"\x7fELF fips libcrypto"),
    ]:
        (reference_dir / name).write_bytes(content)
        (system_dir / name).write_bytes(content)
        os.link(system_dir / name, alias_dir / name)

    cpuinfo = root / "cpuinfo"
    cpuinfo.write_text(
        "processor\t: 0\nflags\t\t: fpu vme sse2 aes rdrand\n\n", encoding="utf8"
    )

    return {
        "root": root,
        "openssl_bin": openssl_bin,
        "self_test_bin": self_test_bin,
        "sentinel": sentinel,
        "entrypoint": entrypoint,
        "lib_dir": lib_dir,
        "modules_dir": modules_dir,
        "openssl_conf": openssl_conf,
        "reference_dir": reference_dir,
        "system_dir": system_dir,
        "alias_dir": alias_dir,
        "cpuinfo": cpuinfo,
    }


@pytest.fixture
def user_conf(fips_root):
    libraries = ["libssl.so.3", "libcrypto.so.3"]
    return {
        "defaults": {
            "architectures": [platform.machine()],
            "command_timeout": 10,
            "self_test_timeout": 10,
        },
        "paths": {
            "openssl_bin": str(fips_root["openssl_bin"]),
            "wolfssl_lib_dir": str(fips_root["lib_dir"]),
            "fips_libraries": [
                {
                    "system": str(fips_root["system_dir"] / name),
                    "reference": str(fips_root["reference_dir"] / name),
                }
                for name in libraries
            ],
            "hardlinked_libraries": [
                {
                    "path": str(fips_root["alias_dir"] / name),
                    "target": str(fips_root["system_dir"] / name),
                }
                for name in libraries
            ],
            "other_crypto_libraries": [str(fips_root["lib_dir"] / "libmbedtls.so")],
            "self_test_bin": str(fips_root["self_test_bin"]),
            "entrypoint": str(fips_root["entrypoint"]),
            "cpuinfo": str(fips_root["cpuinfo"]),
        },
    }


@pytest.fixture
def config_file(tmp_path, user_conf):
    conf_path = tmp_path / "config.yaml"
    conf_path.write_text(yaml.safe_dump(user_conf), encoding="utf8")
    return conf_path


@pytest.fixture
def environ(fips_root, config_file):
    return {
        "PATH": os.environ.get("PATH", "/usr/bin:/bin"),
        "OPENSSL_CONF": str(fips_root["openssl_conf"]),
        "OPENSSL_MODULES": str(fips_root["modules_dir"]),
        "LD_LIBRARY_PATH": str(fips_root["lib_dir"]),
        "VALKEY_FIPS_CONFIG": str(config_file),
    }


@pytest.fixture
def config(config_file, environ):
    return get_config(filename=str(config_file), environ=environ)


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=400, color_system=None)


@pytest.fixture
def exec_calls(monkeypatch):
    def fake_execv(path, argv):
        raise ExecCalled(path, argv)

    monkeypatch.setattr(os, "execv", fake_execv)
    return ExecCalled
