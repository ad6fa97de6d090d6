import pytest

from topic_binder import main as cli
from topic_binder.core.errors import InvalidArgumentError

VALID_CONFIG = """
logging:
  level: DEBUG
destinations:
  - destination: OrderEvents
    jndi_name: jms/OrderEvents
  - destination: PriceTicks
    type: Topic
    jndi_name: jms/PriceTicks
    topic_qos: "durability.kind=VOLATILE"
  - destination: Disabled
    jndi_name: jms/Disabled
    enabled: false
"""


@pytest.fixture
def config_file(tmp_path):
    def write(content: str) -> str:
        path = tmp_path / "config.yaml"
        path.write_text(content)
        return str(path)

    return write


def test_build_destinations_skips_disabled():
    config = {
        "destinations": [
            {"destination": "A", "jndi_name": "jms/A"},
            {"destination": "B", "jndi_name": "jms/B", "enabled": False},
        ]
    }

    destinations = cli.build_destinations(config)

    assert [d.destination_name for d in destinations] == ["A"]


def test_build_destinations_rejects_queue():
    with pytest.raises(InvalidArgumentError):
        cli.build_destinations(
            {"destinations": [{"destination": "A", "type": "Queue", "jndi_name": "jms/A"}]}
        )


def test_check_valid_config(config_file):
    assert cli.main(["--config", config_file(VALID_CONFIG), "--check"]) == 0


def test_check_reports_bad_policy(config_file):
    path = config_file(
        """
destinations:
  - destination: OrderEvents
    jndi_name: jms/OrderEvents
    data_reader_qos: "reliability.kind=SOMETIMES"
"""
    )

    assert cli.main(["--config", path, "--check"]) == 1


def test_check_reports_missing_jndi_name(config_file):
    path = config_file(
        """
destinations:
  - destination: OrderEvents
"""
    )

    assert cli.main(["--config", path, "--check"]) == 1


def test_invalid_type_fails(config_file):
    path = config_file(
        """
destinations:
  - destination: Orders
    type: Queue
    jndi_name: jms/Orders
"""
    )

    assert cli.main(["--config", path]) == 1


def test_no_destinations(config_file):
    assert cli.main(["--config", config_file("logging:\n  level: INFO\n")]) == 0


def test_missing_config_file_exits(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--config", str(tmp_path / "missing.yaml")])

    assert exc_info.value.code == 1


def test_yaml_error_exits(config_file):
    with pytest.raises(SystemExit):
        cli.main(["--config", config_file("destinations: [unclosed")])


@pytest.mark.parametrize(
    "config",
    [
        {"destinations": ["OrderEvents"]},
        {"destinations": {"destination": "OrderEvents"}},
    ],
)
def test_build_destinations_rejects_malformed_entries(config):
    with pytest.raises(InvalidArgumentError):
        cli.build_destinations(config)


@pytest.mark.parametrize(
    "content",
    [
        "destinations:\n  - OrderEvents\n",
        "- destination: OrderEvents\n  jndi_name: jms/OrderEvents\n",
        "logging: verbose\n",
    ],
)
def test_malformed_config_fails(config_file, content):
    assert cli.main(["--config", config_file(content), "--check"]) == 1


def test_null_logging_section_uses_defaults(config_file):
    path = config_file(
        """
logging: null
destinations:
  - destination: OrderEvents
    jndi_name: jms/OrderEvents
"""
    )

    assert cli.main(["--config", path, "--check"]) == 0
