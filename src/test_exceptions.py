import pytest
from valkeyfips import exceptions
from valkeyfips.models import FailureReason


def test_failure_reasons():
    assert exceptions.MissingArtifact("gone").reason == FailureReason.MISSING_ARTIFACT
    assert exceptions.IntegrityViolation("x").reason == FailureReason.INTEGRITY
    assert exceptions.SelfTestFailed("x", returncode=1).reason == FailureReason.SELF_TEST
    assert exceptions.ValidationFailure("x", FailureReason.ENVIRONMENT).reason == FailureReason.ENVIRONMENT


def test_self_test_failed_is_tool_failed():
    with pytest.raises(exceptions.ToolFailed) as err:
        raise exceptions.SelfTestFailed("self-test exited 2", returncode=2, output="CAST failed")
    assert err.value.returncode == 2
    assert err.value.output == "CAST failed"


def test_command_timeout():
    err = exceptions.CommandTimeout("/usr/local/bin/fips-startup-check", 120)
    assert str(err) == "/usr/local/bin/fips-startup-check did not finish within 120 seconds"
    assert err.reason == FailureReason.TIMEOUT
    assert err.reason != exceptions.ToolFailed.reason


def test_configuration_error():
    with pytest.raises(ValueError):
        raise exceptions.ConfigurationError("no variant")


def test_handoff_error():
    with pytest.raises(OSError):
        raise exceptions.HandoffError("entrypoint missing")
