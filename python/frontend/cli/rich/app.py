"""Rich terminal frontend: coloured columns, slots and piles.

Uses the ``rich`` library for styled output.  Play is keyboard only:
pick a source (``o`` for the open pile, ``1``-``4`` for a column,
``5``-``8`` for a slot), then a target (``1``-``4`` / ``5``-``8``).
Includes a menu for difficulty selection.
"""

from __future__ import annotations

import random

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.engine.gamerules import ZoneTransfer
from backend.engine.gamesolver import Solver
from backend.engine.gamestate import GameState
from backend.models.board import COLUMN_COUNT, SLOT_COUNT, ZoneKind
from backend.models.card import Card
from backend.models.difficulty import DIFFICULTY_SETTINGS, Difficulty
from backend.models.events import DrawOutcome, GameEvent
from frontend.cli.input_handler import get_key

console = Console()

CELL_WIDTH = 12
COLUMN_KEYS = [str(i + 1) for i in range(COLUMN_COUNT)]
SLOT_KEYS = [str(COLUMN_COUNT + i + 1) for i in range(SLOT_COUNT)]

Selection = tuple[ZoneKind, int]


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _card_text(card: Card, state: GameState, highlight: bool = False) -> Text:
    if not card.face_up:
        return Text("▒" * (CELL_WIDTH - 2), style="dim")
    cat = state.categories[card.category_id]
    label = card.label
    if not card.is_key and cat.image_mode and card.glyph:
        label = card.glyph
    style = f"bold black on {cat.color}" if card.is_key else f"bold {cat.color}"
    if highlight:
        style += " reverse"
    return Text(label[: CELL_WIDTH - 2], style=style)


def _resolve_card(game: GamePlay, source: Selection, target_kind: ZoneKind) -> str | None:
    """Pick the card to lift: a column's whole movable run, unless it goes to a slot."""
    kind, index = source
    pile = game.state.board.zone(kind, index)
    if not pile:
        return None
    if kind == ZoneKind.HOLDING and target_kind == ZoneKind.HOLDING:
        start = ZoneTransfer.movable_run_start(pile)
        return pile[start].id if start is not None else None
    return pile[-1].id


# -- board rendering ----------------------------------------------------------


def _render_slots(game: GamePlay) -> Table:
    state = game.state
    table = Table(box=rich.box.ROUNDED, border_style="bright_blue", padding=(0, 1))
    for key in SLOT_KEYS:
        table.add_column(f"[dim]{key}[/dim]", width=CELL_WIDTH, justify="center")

    tops: list[Text] = []
    counts: list[Text] = []
    for slot in state.board.collection_slots:
        if not slot:
            tops.append(Text("·", style="dim"))
            counts.append(Text(""))
            continue
        key = slot[0]
        tops.append(_card_text(slot[-1], state))
        collected = game.get_collected_count(key.category_id)
        total = state.categories[key.category_id].item_count
        counts.append(Text(f"{collected}/{total}", style="dim"))
    table.add_row(*tops)
    table.add_row(*counts)
    return table


def _render_columns(state: GameState, selection: Selection | None) -> Table:
    table = Table(box=rich.box.SIMPLE_HEAVY, border_style="bright_blue", padding=(0, 1))
    for i, key in enumerate(COLUMN_KEYS):
        marker = "▶ " if selection == (ZoneKind.HOLDING, i) else ""
        table.add_column(f"[bold cyan]{marker}{key}[/bold cyan]", width=CELL_WIDTH, justify="center")

    columns = state.board.holding_columns
    height = max((len(c) for c in columns), default=0)
    for row in range(max(height, 1)):
        cells: list[Text] = []
        for i, col in enumerate(columns):
            if row < len(col):
                highlight = selection == (ZoneKind.HOLDING, i) and row == len(col) - 1
                cells.append(_card_text(col[row], state, highlight))
            else:
                cells.append(Text(""))
        table.add_row(*cells)
    return table


def _render_piles(state: GameState, selection: Selection | None) -> Text:
    board = state.board
    piles = Text()
    piles.append("  Draw: ", style="dim")
    piles.append(f"{len(board.draw_pile)} cards", style="bold white")
    piles.append("    Open: ", style="dim")
    if board.open_pile:
        selected = selection == (ZoneKind.OPEN_PILE, 0)
        piles.append_text(_card_text(board.open_pile[-1], state, selected))
        piles.append(f"  (+{len(board.open_pile) - 1})", style="dim")
    else:
        piles.append("·", style="dim")
    return piles


# -- menu screen --------------------------------------------------------------


def _draw_menu(selected: Difficulty) -> None:
    console.clear()

    levels = Text()
    for i, diff in enumerate(Difficulty):
        if i:
            levels.append("  ")
        if diff is selected:
            levels.append(f" {diff.value.upper()} ", style="bold green on #313244")
        else:
            levels.append(f" {diff.value.upper()} ", style="dim")

    settings = DIFFICULTY_SETTINGS[selected]
    detail = Text(
        f"  categories ×{settings.category_multiplier}"
        f"   turns ×{settings.turn_multiplier}",
        style="dim",
    )
    nav = Text("  ← →  change difficulty", style="dim")

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Play    ")
    opts.append("H", style="dim bold")
    opts.append("  Help    ", style="dim")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(levels),
        Align.center(detail),
        Align.center(nav),
        Text(""),
        Align.center(opts),
        Text(""),
    )
    panel = Panel(
        body,
        title="[bold]C A T E G O R Y   S O R T[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


def _draw_help() -> None:
    console.clear()
    rows = [
        ("Space / D", "draw a card (costs one turn)"),
        ("O", "select the open pile's top card"),
        ("1-4", "select a column, or drop onto it"),
        ("5-8", "select a slot, or drop onto it"),
        ("C", "cancel the selection"),
        ("N", "play a hint"),
        ("R", "restart (random difficulty)"),
        ("Q", "back"),
    ]
    table = Table(box=rich.box.ROUNDED, border_style="dim", show_header=False)
    table.add_column(style="bold cyan", justify="right")
    table.add_column(style="dim")
    for key, text in rows:
        table.add_row(key, text)

    rules = Text(
        "A slot takes a KEY card first, then that category's items.\n"
        "A column takes anything when empty, otherwise cards of its top's\n"
        "category; nothing goes on a KEY.  A full slot clears itself.\n"
        "Clear every card before the turns run out.",
        style="white",
    )
    panel = Panel(
        Group(Align.center(table), Text(""), Align.center(rules)),
        title="[bold]HOW  TO  PLAY[/bold]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- game screens -------------------------------------------------------------


def _draw_game(game: GamePlay, selection: Selection | None, status: str = "") -> None:
    console.clear()
    state = game.state

    stats = Text()
    stats.append("  Turns: ", style="dim")
    turns_style = "bold red" if state.turns_remaining <= 3 else "bold yellow"
    stats.append(f"{state.turns_remaining}/{game.turn_budget}", style=turns_style)
    stats.append("    Moves: ", style="dim")
    stats.append(str(state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(state.elapsed_time), style="bold yellow")

    controls = Text()
    controls.append("  Space", style="bold cyan")
    controls.append("  draw   ", style="dim")
    controls.append("O 1-8", style="bold cyan")
    controls.append("  pick / drop   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  hint   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")

    body = Group(
        Align.center(_render_slots(game)),
        Align.center(_render_columns(state, selection)),
        Align.center(_render_piles(state, selection)),
    )
    panel = Panel(
        body,
        title=f"[bold cyan]Category Sort  {game.difficulty.value.upper()}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_end(game: GamePlay) -> None:
    console.clear()
    state = game.state

    banner = Text()
    if game.is_won:
        banner.append("\n  ★ ", style="bold yellow")
        banner.append("BOARD CLEARED!", style="bold green")
        banner.append("  Every card sorted.  ", style="green")
        banner.append("★\n", style="bold yellow")
        border = "bold green"
    else:
        banner.append("\n  OUT OF TURNS", style="bold red")
        banner.append(f"  {state.board.unsorted_count()} cards left unsorted.\n", style="red")
        border = "bold red"

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(state.moves), style="bold yellow")
    stats.append("    Turns used: ", style="dim")
    stats.append(f"{game.turn_budget - state.turns_remaining}/{game.turn_budget}", style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(state.elapsed_time), style="bold yellow")

    panel = Panel(
        Group(Align.center(banner), Align.center(stats)),
        title=f"[{border}]Category Sort  {game.difficulty.value.upper()}[/{border}]",
        border_style=border,
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(
        Align.center(Text("\n  Press R to play again, Q to go back.\n", style="dim"))
    )


# -- actions ------------------------------------------------------------------


def _apply_hint(game: GamePlay) -> str:
    move = Solver.hint(game.state)
    if move is None:
        return "[yellow]No useful move. Draw a card.[/yellow]"
    game.handle_drop(move.card_id, move.target_kind, move.target_index)
    where = "slot" if move.target_kind == ZoneKind.COLLECTION else "column"
    return f"[cyan]Hint:[/cyan] moved to {where} [bold]{move.target_index + 1}[/bold]"


def _draw_card(game: GamePlay) -> str:
    outcome = game.draw()
    if outcome == DrawOutcome.NO_TURNS_REMAINING:
        return "[red]No turns remaining.[/red]"
    if outcome == DrawOutcome.RECYCLED:
        return "[cyan]Open pile turned back into the draw pile.[/cyan]"
    if outcome == DrawOutcome.EMPTY:
        return "[yellow]Nothing left to draw.[/yellow]"
    return ""


def _drop(game: GamePlay, source: Selection, target_kind: ZoneKind, target_index: int) -> str:
    card_id = _resolve_card(game, source, target_kind)
    if card_id is None or not game.handle_drop(card_id, target_kind, target_index):
        return "[red]Can't drop there.[/red]"
    return ""


def _status_from_events(game: GamePlay, status: str) -> tuple[str, bool]:
    """Fold queued events into the status line; True once the game is over."""
    over = False
    for record in game.drain_events():
        if record.event == GameEvent.SLOT_COMPLETED and record.category_id:
            label = game.state.categories[record.category_id].label
            status = f"[bold green]{label} complete![/bold green]"
        elif record.event in (GameEvent.BOARD_CLEARED, GameEvent.TURNS_EXHAUSTED):
            over = True
    return status, over


# -- game loop ----------------------------------------------------------------


def _play_game(game: GamePlay) -> None:
    while True:
        selection: Selection | None = None
        status = ""
        over = False

        while not over:
            _draw_game(game, selection, status)
            status = ""
            key = get_key()

            if key == "quit":
                return
            if key == "draw":
                selection = None
                status = _draw_card(game)
            elif key == "open":
                selection = (ZoneKind.OPEN_PILE, 0) if game.state.board.open_pile else None
            elif key in COLUMN_KEYS or key in SLOT_KEYS:
                if key in COLUMN_KEYS:
                    kind, index = ZoneKind.HOLDING, COLUMN_KEYS.index(key)
                else:
                    kind, index = ZoneKind.COLLECTION, SLOT_KEYS.index(key)
                if selection is None:
                    selection = (kind, index) if game.state.board.zone(kind, index) else None
                else:
                    status = _drop(game, selection, kind, index)
                    selection = None
            elif key == "cancel":
                selection = None
            elif key == "hint":
                selection = None
                status = _apply_hint(game)
            elif key == "help":
                _draw_help()
            elif key == "restart":
                if game.request_restart() == GameEvent.CONFIRM_RESTART:
                    _draw_game(game, selection, "[yellow]Restart at a random difficulty? (Y/N)[/yellow]")
                    if get_key() != "yes":
                        continue
                game.restart()
                selection = None
                continue

            status, over = _status_from_events(game, status)

        # -- game over ---------------------------------------------------------
        game.state.pause()
        _draw_end(game)

        while True:
            key = get_key()
            if key == "restart":
                game.new_game()
                break
            if key == "quit":
                return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(rng: random.Random, difficulty: Difficulty) -> None:
    levels = list(Difficulty)
    selected = levels.index(difficulty)

    while True:
        _draw_menu(levels[selected])
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key == "left":
            selected = max(0, selected - 1)
        elif key == "right":
            selected = min(len(levels) - 1, selected + 1)
        elif key in ("1", "enter"):
            _play_game(GamePlay(levels[selected], rng=rng))
        elif key == "help":
            _draw_help()


# -- public entry point -------------------------------------------------------


def run(difficulty: Difficulty = Difficulty.NORMAL, seed: int | None = None) -> None:
    """Launch the Rich CLI with interactive menu."""
    _menu_loop(random.Random(seed), difficulty)
