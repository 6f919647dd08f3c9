"""
Pytest configuration and shared fixtures.
"""

from typing import Dict, List, Optional, Sequence, Tuple, Union

import pytest

from exitnode.core.config import LIST_COMMAND, SET_COMMAND, Settings, runtime_config, settings
from exitnode.services.command_runner import CommandResult, CommandRunner
from exitnode.services.exit_node_source import parse_exit_node_list

SAMPLE_LISTING = """\
 IP              HOSTNAME                        COUNTRY           CITY          STATUS

 100.64.0.1      us-nyc-wg-001.mullvad.ts.net    USA               New York      -
 100.64.0.2      us-any.mullvad.ts.net           USA               Any           -
 100.64.0.3      fr-par-wg-001.mullvad.ts.net    France            Paris         selected
 100.64.0.4      fr-mrs-wg-001.mullvad.ts.net    France            Marseille     -
 100.64.0.5      us-chi-wg-001.mullvad.ts.net    USA               Chicago       -
 100.64.0.9      broken-host.mullvad.ts.net
 100.64.0.6      us-nyc-wg-002.mullvad.ts.net    USA               New York      -
 100.64.0.7      cz-prg-wg-001.mullvad.ts.net    Czech Republic    Prague        -

# To use an exit node, use `tailscale set --exit-node=<ip>`.
"""

Response = Union[Tuple[int, str, str], Exception]


class FakeRunner(CommandRunner):
    """Command runner that answers from a table instead of spawning processes."""

    def __init__(
        self,
        responses: Optional[Dict[Tuple[str, ...], Response]] = None,
        default: Response = (0, "", ""),
    ):
        super().__init__(timeout=None)
        self.responses = dict(responses or {})
        self.default = default
        self.calls: List[Tuple[str, ...]] = []
        self.capture_flags: List[bool] = []

    def run(self, command: Sequence[str], capture: bool = True) -> CommandResult:
        command = tuple(command)
        self.calls.append(command)
        self.capture_flags.append(capture)

        response = self.responses.get(command, self.default)
        if isinstance(response, Exception):
            raise response

        return_code, stdout, stderr = response
        return CommandResult(command=command, return_code=return_code, stdout=stdout, stderr=stderr)

    @property
    def set_calls(self) -> List[Tuple[str, ...]]:
        return [call for call in self.calls if call[:len(SET_COMMAND)] == SET_COMMAND]

    @property
    def list_calls(self) -> List[Tuple[str, ...]]:
        return [call for call in self.calls if call == LIST_COMMAND]


@pytest.fixture
def listing_output() -> str:
    """Raw output of the listing command."""
    return SAMPLE_LISTING


@pytest.fixture
def exit_nodes():
    """Rows parsed from the sample listing."""
    return parse_exit_node_list(SAMPLE_LISTING)


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner whose listing command succeeds and set commands succeed."""
    return FakeRunner({LIST_COMMAND: (0, SAMPLE_LISTING, "")})


@pytest.fixture
def test_settings() -> Settings:
    """Settings without .env lookup and without the quit delay."""
    return Settings(_env_file=None, quit_delay=0)


@pytest.fixture(autouse=True)
def restore_global_config():
    """Undo changes the CLI callback makes to the global configuration."""
    saved_runtime = runtime_config.model_dump()
    saved_debug = settings.debug
    saved_level = settings.log_level

    yield

    for key, value in saved_runtime.items():
        setattr(runtime_config, key, value)
    settings.debug = saved_debug
    settings.log_level = saved_level


@pytest.fixture
def make_runner():
    """Build a FakeRunner from a response table."""
    return FakeRunner
