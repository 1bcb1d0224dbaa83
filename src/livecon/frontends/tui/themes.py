"""Color themes for the terminal console.

Pass a different theme to rich's Console to restyle the output.
"""

from rich.theme import Theme


def create_theme(
    *,
    prompt: str = "bold green",
    echo: str = "bold cyan",
    output: str = "default",
    error: str = "bold red",
    warning: str = "bold yellow",
    info: str = "dim",
) -> Theme:
    """Create a theme with every console style defined."""
    return Theme(
        {
            "prompt": prompt,
            "echo": echo,
            "output": output,
            "error": error,
            "warning": warning,
            "info": info,
        }
    )


DEFAULT_THEME = create_theme()

NORD_THEME = create_theme(
    prompt="#88C0D0",
    echo="#81A1C1",
    output="#D8DEE9",
    error="#BF616A",
    warning="#EBCB8B",
    info="#4C566A",
)

MONO_THEME = create_theme(
    prompt="bold",
    echo="bold",
    output="default",
    error="bold",
    warning="bold",
    info="dim",
)

THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "nord": NORD_THEME,
    "mono": MONO_THEME,
}


def get_theme(name: str) -> Theme:
    """Look up a theme by name, falling back to DEFAULT_THEME."""
    return THEMES.get(name.lower(), DEFAULT_THEME)
