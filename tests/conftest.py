import pytest

from pi.prompts import colors
from pi.prompts.spinner import Spinner
from pi.prompts.symbols import Symbols, get_symbols, set_symbols


@pytest.fixture(autouse=True)
def _reset_globals():
    """Isolate tests from the process-wide spinner slot and glyph set."""
    previous = get_symbols()
    set_symbols(Symbols.unicode())
    Spinner._running = None
    yield
    Spinner._running = None
    set_symbols(previous)


@pytest.fixture
def color_palette(monkeypatch):
    """Swap the module-level styles for real SGR wrappers.

    stdout is not a TTY under pytest, so the import-time palette is plain.
    """
    palette = colors.create_colors(True)
    for name, style in vars(palette).items():
        if callable(style):
            monkeypatch.setattr(colors, name, style)
    return palette
