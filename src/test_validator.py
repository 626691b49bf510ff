import pytest

import valkeyfips

from valkeyfips import FipsValidator, validate, constants
from valkeyfips.models import FailureReason, CheckMetadata

CHECKLIST = [
    "operating_environment",
    "environment_variables",
    "openssl_installation",
    "wolfssl_library",
    "wolfprovider_module",
    "provider_loaded",
    "crypto_library_integrity",
    "cryptographic_self_test",
]


def test_all_checks_pass(config, environ, console):
    report = validate(config, console=console, environ=environ)
    assert report.passed
    assert report.failed_check is None
    assert [r.key for r in report.results] == CHECKLIST
    assert all(r.status == constants.CHECK_STATUS_PASS for r in report.results)
    assert "ALL FIPS CHECKS PASSED" in console.file.getvalue()


def test_stops_at_first_failure(config, environ, console, fips_root):
    (fips_root["lib_dir"] / "libwolfssl.so.44").unlink()
    report = validate(config, console=console, environ=environ)
    assert not report.passed
    assert report.failed_check == "wolfssl_library"
    assert report.reason == FailureReason.MISSING_ARTIFACT.value
    assert [r.key for r in report.results] == CHECKLIST[:4]
    assert not fips_root["sentinel"].exists()
    output = console.file.getvalue()
    assert "FIPS VALIDATION FAILED" in output
    assert "wolfSSL library is missing" in output


@pytest.mark.parametrize(
    "artifact,failed_check,reason",
    [
        ("openssl_bin", "openssl_installation", FailureReason.MISSING_ARTIFACT),
        ("openssl_conf", "environment_variables", FailureReason.ENVIRONMENT),
        ("modules_dir", "environment_variables", FailureReason.ENVIRONMENT),
        ("self_test_bin", "cryptographic_self_test", FailureReason.MISSING_ARTIFACT),
    ],
)
def test_fails_closed_on_missing_artifact(
    config, environ, console, fips_root, artifact, failed_check, reason
):
    target = fips_root[artifact]
    if target.is_dir():
        for child in target.iterdir():
            child.unlink()
        target.rmdir()
    else:
        target.unlink()
    report = validate(config, console=console, environ=environ)
    assert not report.passed
    assert report.failed_check == failed_check
    assert report.reason == reason.value


def test_fails_closed_on_missing_provider_module(config, environ, console, fips_root):
    (fips_root["modules_dir"] / "libwolfprov.so").unlink()
    report = validate(config, console=console, environ=environ)
    assert report.failed_check == "wolfprovider_module"
    assert report.reason == FailureReason.MISSING_ARTIFACT.value


def test_openssl_conf_not_set(config, environ, console, caplog):
    del environ["OPENSSL_CONF"]
    report = validate(config, console=console, environ=environ)
    assert not report.passed
    assert report.failed_check == "environment_variables"
    assert "OPENSSL_CONF is not set" in console.file.getvalue()
    assert "OPENSSL_CONF is not set" in caplog.text


def test_skip_flag_only_skips_self_test(config, environ, console, fips_root):
    environ["SKIP_FIPS_CHECK"] = "true"
    report = validate(config, console=console, environ=environ)
    assert report.passed
    assert not fips_root["sentinel"].exists()
    statuses = {r.key: r.status for r in report.results}
    assert statuses.pop("cryptographic_self_test") == constants.CHECK_STATUS_SKIP
    assert set(statuses.values()) == {constants.CHECK_STATUS_PASS}


def test_skip_flag_does_not_hide_other_failures(config, environ, console, fips_root):
    environ["SKIP_FIPS_CHECK"] = "true"
    fips_root["openssl_bin"].unlink()
    report = validate(config, console=console, environ=environ)
    assert not report.passed
    assert report.failed_check == "openssl_installation"


def test_timeout_is_a_distinct_failure(
    config, environ, console, fips_root, make_script
):
    make_script(fips_root["self_test_bin"], "exec sleep 5")
    config.defaults.self_test_timeout = 0.5
    report = validate(config, console=console, environ=environ)
    assert report.failed_check == "cryptographic_self_test"
    assert report.reason == FailureReason.TIMEOUT.value


def test_self_test_failure(config, environ, console):
    environ["FAKE_SELF_TEST_EXIT"] = "1"
    report = validate(config, console=console, environ=environ)
    assert report.failed_check == "cryptographic_self_test"
    assert report.reason == FailureReason.SELF_TEST.value


def test_idempotent(config, environ, console):
    first = validate(config, console=console, environ=environ)
    second = validate(config, console=console, environ=environ)
    assert first.passed and second.passed
    assert [(r.key, r.status, r.details) for r in first.results] == [
        (r.key, r.status, r.details) for r in second.results
    ]


def test_unknown_check_fails(config, environ, console):
    config.checks.insert(
        0, CheckMetadata(key="not_a_check", label_as="Nothing to see here")
    )
    report = FipsValidator(config, console=console, environ=environ).run_checks()
    assert not report.passed
    assert report.failed_check == "not_a_check"
    assert report.reason == FailureReason.CONFIGURATION.value
    assert len(report.results) == 1


def test_validator_without_console(config, environ):
    report = validate(config, environ=environ)
    assert report.passed


def test_check_with_broken_import_is_not_unknown(config, environ, console, monkeypatch):
    def broken_import(name, package=None):
        raise ModuleNotFoundError("No module named 'wolfcrypt'", name="wolfcrypt")

    monkeypatch.setattr(valkeyfips, "import_module", broken_import)
    report = FipsValidator(config, console=console, environ=environ).run_checks()
    assert not report.passed
    assert report.failed_check == "operating_environment"
    assert report.reason == FailureReason.TOOL_FAILED.value
    assert report.results[0].summary == "Operating Environment is not CMVP compliant"
    assert "Unknown check" not in console.file.getvalue()
