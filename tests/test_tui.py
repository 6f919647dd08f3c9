"""
Tests for the picker TUI driven through the Textual pilot.
"""

import pytest
from textual.widgets import Input, Static

from exitnode.core.config import LIST_COMMAND, Settings
from exitnode.core.models import DisplayShape, ViewState
from exitnode.services.exit_node_setter import ExitNodeSetter
from exitnode.services.exit_node_source import ExitNodeSource
from exitnode.tui.app import ExitNodePickerApp
from exitnode.tui.screens.picker import PickerScreen
from exitnode.tui.state import HighlightRow
from exitnode.tui.widgets.choice_list import ChoiceList
from exitnode.tui.widgets.exit_node_table import ExitNodeTable


def make_app(rows, shape, runner, settings, current=""):
    return ExitNodePickerApp(
        rows,
        shape=shape,
        current=current,
        source=ExitNodeSource(runner=runner, settings=settings),
        setter=ExitNodeSetter(runner=runner, settings=settings),
        settings=settings,
    )


class TestFlatPicker:
    """Test the flat host list."""

    @pytest.mark.asyncio
    async def test_starts_on_picker_screen(self, exit_nodes, fake_runner, test_settings):
        """Test the initial layout."""
        app = make_app(exit_nodes, DisplayShape.FLAT, fake_runner, test_settings)

        async with app.run_test() as pilot:
            await pilot.pause()

            assert isinstance(app.screen, PickerScreen)
            choice_list = app.screen.query_one("#choice-list", ChoiceList)
            assert len(choice_list.choices) == 6
            assert choice_list.title == "Select an Exit Node"
            assert not app.screen.query(ExitNodeTable)

    @pytest.mark.asyncio
    async def test_select_applies_and_exits(self, exit_nodes, fake_runner, test_settings):
        """Test that Enter applies the highlighted host and quits."""
        app = make_app(exit_nodes, DisplayShape.FLAT, fake_runner, test_settings)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("down", "enter")
            await pilot.pause()

        assert fake_runner.set_calls == [("tailscale", "set", "--exit-node=100.64.0.3")]
        assert app.return_value is not None
        assert app.return_value.label == "fr-par-wg-001.mullvad.ts.net (France, Paris)"

    @pytest.mark.asyncio
    async def test_farewell_is_shown(self, exit_nodes, fake_runner):
        """Test the final frame while the quit delay runs."""
        settings = Settings(_env_file=None, quit_delay=30)
        app = make_app(exit_nodes, DisplayShape.FLAT, fake_runner, settings)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("j", "j", "enter")
            await pilot.pause()

            screen = app.screen
            assert screen.state.view_state is ViewState.CONFIRMED
            assert screen.query_one("#farewell", Static).display is True
            assert screen.query_one("#picker-body").display is False

            # Input after confirming changes nothing.
            await pilot.press("up", "enter")
            await pilot.pause()
            assert len(fake_runner.set_calls) == 1

    @pytest.mark.asyncio
    async def test_quit_without_selection(self, exit_nodes, fake_runner, test_settings):
        """Test that q leaves without applying anything."""
        app = make_app(exit_nodes, DisplayShape.FLAT, fake_runner, test_settings)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("q")
            await pilot.pause()

        assert fake_runner.set_calls == []
        assert app.return_value is None

    @pytest.mark.asyncio
    async def test_ctrl_c_cancels(self, exit_nodes, fake_runner):
        """Test that Ctrl+C goes through the cancel path."""
        settings = Settings(_env_file=None, quit_delay=30)
        app = make_app(exit_nodes, DisplayShape.FLAT, fake_runner, settings)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("ctrl+c")
            await pilot.pause()

            assert app.screen.state.view_state is ViewState.CANCELLED
            assert app.screen.state.farewell == "Not interested? That's cool"

    @pytest.mark.asyncio
    async def test_failed_apply_keeps_picker_open(self, exit_nodes, listing_output, make_runner, test_settings):
        """Test that a rejected exit node leaves the list usable."""
        runner = make_runner(
            {
                LIST_COMMAND: (0, listing_output, ""),
                ExitNodeSetter.build_command("100.64.0.1"): (1, "", "offline"),
            }
        )
        app = make_app(exit_nodes, DisplayShape.FLAT, runner, test_settings)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("enter")
            await pilot.pause()

            state = app.screen.state
            assert state.view_state is ViewState.BROWSING_PRIMARY
            assert state.status == "Error: Failed to set exit node '100.64.0.1': offline"
            assert state.applied is None

            await pilot.press("down", "enter")
            await pilot.pause()

        assert runner.set_calls[-1] == ("tailscale", "set", "--exit-node=100.64.0.3")
        assert app.return_value.label == "fr-par-wg-001.mullvad.ts.net (France, Paris)"

    @pytest.mark.asyncio
    async def test_empty_listing(self, fake_runner, test_settings):
        """Test that an empty list shows a placeholder and ignores Enter."""
        app = make_app((), DisplayShape.FLAT, fake_runner, test_settings)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("enter", "down")
            await pilot.pause()

            choice_list = app.screen.query_one("#choice-list", ChoiceList)
            assert choice_list.choices == ()
            assert fake_runner.set_calls == []


class TestDrillDownPicker:
    """Test the country and city lists."""

    @pytest.mark.asyncio
    async def test_country_then_city(self, exit_nodes, fake_runner, test_settings):
        """Test applying a city after choosing its country."""
        app = make_app(exit_nodes, DisplayShape.DRILL_DOWN, fake_runner, test_settings)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("enter")
            await pilot.pause()

            choice_list = app.screen.query_one("#choice-list", ChoiceList)
            assert choice_list.title == "Select a City in USA"
            assert [choice.label for choice in choice_list.choices] == ["New York", "Chicago"]

            await pilot.press("down", "enter")
            await pilot.pause()

        assert fake_runner.set_calls == [("tailscale", "set", "--exit-node=100.64.0.5")]
        assert app.return_value.label == "Chicago"

    @pytest.mark.asyncio
    async def test_escape_goes_back(self, exit_nodes, fake_runner, test_settings):
        """Test returning from the city list."""
        app = make_app(exit_nodes, DisplayShape.DRILL_DOWN, fake_runner, test_settings)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("down", "enter")
            await pilot.pause()
            await pilot.press("escape")
            await pilot.pause()

            state = app.screen.state
            assert state.view_state is ViewState.BROWSING_PRIMARY
            assert state.highlighted.label == "France"
            choice_list = app.screen.query_one("#choice-list", ChoiceList)
            assert choice_list.title == "Select a Country"


class TestTablePicker:
    """Test the filterable table."""

    @pytest.mark.asyncio
    async def test_initial_table(self, exit_nodes, fake_runner, test_settings):
        """Test rows and status line on start."""
        app = make_app(exit_nodes, DisplayShape.TABLE, fake_runner, test_settings, current="France, Paris")

        async with app.run_test() as pilot:
            await pilot.pause()

            table = app.screen.query_one("#exit-node-table", ExitNodeTable)
            assert table.row_count == 6
            assert app.focused is table
            assert app.screen.state.status == "Current selection is: France, Paris"

    @pytest.mark.asyncio
    async def test_filter_then_apply(self, exit_nodes, fake_runner, test_settings):
        """Test typing a filter and applying the first match."""
        app = make_app(exit_nodes, DisplayShape.TABLE, fake_runner, test_settings)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("tab")
            await pilot.pause()

            assert isinstance(app.focused, Input)

            await pilot.press("m", "a", "r")
            await pilot.pause()

            table = app.screen.query_one("#exit-node-table", ExitNodeTable)
            assert table.row_count == 1
            assert app.screen.state.filter_text == "mar"

            await pilot.press("tab")
            await pilot.pause()
            assert app.focused is table

            await pilot.press("enter")
            await pilot.pause()

            assert fake_runner.set_calls == [("tailscale", "set", "--exit-node=100.64.0.4")]
            state = app.screen.state
            # The table stays open and shows the refreshed selection.
            assert state.view_state is ViewState.BROWSING_PRIMARY
            assert state.status == "Current selection is: France, Paris"

    @pytest.mark.asyncio
    async def test_filter_keeps_cursor_settled(self, exit_nodes, fake_runner, test_settings):
        """Test that refilling the table does not feed highlights back into the state."""
        app = make_app(exit_nodes, DisplayShape.TABLE, fake_runner, test_settings)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("down", "down")
            await pilot.pause()
            await pilot.press("tab", "f")
            await pilot.pause(0.2)

            screen = app.screen
            table = screen.query_one("#exit-node-table", ExitNodeTable)
            cursor = screen.state.cursor
            assert table.cursor_row == cursor

            received = []
            send_event = screen.send_event

            def recording_send_event(event):
                received.append(event)
                send_event(event)

            screen.send_event = recording_send_event
            await pilot.pause(0.5)

            assert [event for event in received if isinstance(event, HighlightRow)] == []
            assert screen.state.cursor == cursor
            assert table.cursor_row == cursor

            # Clearing the filter and applying uses the row under the cursor.
            await pilot.press("backspace", "tab")
            await pilot.pause(0.2)
            expected = screen.state.highlighted.node.address
            assert table.cursor_row == screen.state.cursor
            await pilot.press("enter")
            await pilot.pause()

        assert fake_runner.set_calls == [("tailscale", "set", f"--exit-node={expected}")]

    @pytest.mark.asyncio
    async def test_enter_in_filter_box_does_not_apply(self, exit_nodes, fake_runner, test_settings):
        """Test that Enter while typing is ignored."""
        app = make_app(exit_nodes, DisplayShape.TABLE, fake_runner, test_settings)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("tab", "u", "s", "a", "enter")
            await pilot.pause()

            assert fake_runner.set_calls == []
            assert app.screen.state.view_state is ViewState.FILTER_EDITING

    @pytest.mark.asyncio
    async def test_backspace_clears_exit_node(self, exit_nodes, listing_output, make_runner, test_settings):
        """Test unsetting the exit node from the table."""
        listing = listing_output.replace("selected", "-       ")
        runner = make_runner({LIST_COMMAND: (0, listing, "")})
        app = make_app(exit_nodes, DisplayShape.TABLE, runner, test_settings, current="France, Paris")

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("backspace")
            await pilot.pause()

            assert runner.set_calls == [("tailscale", "set", "--exit-node=")]
            assert app.screen.state.status == "No exit node selected"
