import pytest
from hubbench import BlockHive, SlotHub
from hubbench._pytest_plugin import bench_config, fake_clock  # noqa: F401


@pytest.fixture(params=[BlockHive, SlotHub], ids=["hive", "hub"])
def container_type(request):
    """Each test using this fixture runs once per candidate container."""
    return request.param
