import pytest

from retail_loyalty.config import set_config_for_test


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    """Fresh config per test, with data written under the test's tmp dir."""
    set_config_for_test(data_dir=str(tmp_path / "data"), tally_enabled=False)
    yield
