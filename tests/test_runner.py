import pytest

from checkout.errors import ConfigError, UnknownItemError
from checkout.runner import ScanPolicy, run_checkout

def test_skip_policy_collects_unknown_skus(catalogue):
    run = run_checkout(catalogue, ["A", "E", "A", "F"], ScanPolicy.SKIP)
    assert run.rejected == ["E", "F"]
    assert run.session.total_price() == 100
    assert run.summary().total == 100

def test_abort_policy_raises_first_unknown(catalogue):
    with pytest.raises(UnknownItemError) as exc:
        run_checkout(catalogue, ["A", "E", "F"], "abort")
    assert exc.value.sku == "E"

def test_default_policy_is_skip(catalogue):
    run = run_checkout(catalogue, ["E"])
    assert run.rejected == ["E"]
    assert run.session.total_price() == 0

@pytest.mark.parametrize("raw, expected", [("skip", ScanPolicy.SKIP), (" ABORT ", ScanPolicy.ABORT), (ScanPolicy.ABORT, ScanPolicy.ABORT)])
def test_parse_policy(raw, expected):
    assert ScanPolicy.parse(raw) is expected

def test_parse_unknown_policy():
    with pytest.raises(ConfigError):
        ScanPolicy.parse("retry")
