"""Builders for menu test data."""

from codex_control.tui.menu.types import Action, Entry, MenuConfig, PanelUpdate


def make_entries(count: int, prefix: str = "entry") -> list[Entry]:
    """Entries titled <prefix>-1 .. <prefix>-N with the index as payload."""
    return [
        Entry(title=f"{prefix}-{i}", description=f"description {i}", payload=i)
        for i in range(1, count + 1)
    ]


def echo_action(label: str = "Echo", exit_after: bool = False) -> Action:
    """Action that succeeds with the entry's payload."""

    async def run(entry: Entry) -> PanelUpdate:
        return PanelUpdate(
            title=label,
            content=f"ran on {entry.title}",
            payload=entry.payload,
            exit_after=exit_after,
        )

    return Action(label=label, run=run)


def make_config(loader, actions=None, **kwargs) -> MenuConfig:
    """MenuConfig with an echo action unless actions are given."""
    if actions is None:
        actions = [echo_action()]
    return MenuConfig(loader=loader, actions=actions, **kwargs)
