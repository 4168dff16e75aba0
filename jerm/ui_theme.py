"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (sidebar, navigator, status line). The
Pygments style used for the input line is a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    title: str
    dim: str
    prompt: str
    bookmark_slot: str
    bookmark_age: str
    nav_dir: str
    nav_parent: str
    status_mode: str
    status_branch: str
    status_dirty: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;81m",
    dim="\033[2;38;5;250m",
    prompt="\033[1;38;5;44m",
    bookmark_slot="\033[38;5;229m",
    bookmark_age="\033[2;38;5;250m",
    nav_dir="\033[1;34m",
    nav_parent="\033[38;5;109m",
    status_mode="\033[1;7;38;5;81m",
    status_branch="\033[38;5;42m",
    status_dirty="\033[38;5;214m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    dim="\033[2;38;5;110m",
    prompt="\033[1;38;5;39m",
    bookmark_slot="\033[38;5;153m",
    bookmark_age="\033[2;38;5;110m",
    nav_dir="\033[1;38;5;45m",
    nav_parent="\033[38;5;73m",
    status_mode="\033[1;7;38;5;45m",
    status_branch="\033[38;5;84m",
    status_dirty="\033[38;5;215m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    title="",
    dim="",
    prompt="",
    bookmark_slot="",
    bookmark_age="",
    nav_dir="",
    nav_parent="",
    status_mode="",
    status_branch="",
    status_dirty="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


@dataclass(frozen=True)
class IconPair:
    nerd: str
    fallback: str


FOLDER_ICON = IconPair("\uf07b", "")
HOME_ICON = IconPair("\uf015", "~")
GIT_BRANCH_ICON = IconPair("\ue725", "")
UP_ARROW_ICON = IconPair("\uf062", "..")


@dataclass(frozen=True)
class Icons:
    """Glyphs for the current font capability."""

    folder: str
    home: str
    git_branch: str
    up_arrow: str


def resolve_icons(nerd_fonts: bool) -> Icons:
    pick = (lambda pair: pair.nerd) if nerd_fonts else (lambda pair: pair.fallback)
    return Icons(
        folder=pick(FOLDER_ICON),
        home=pick(HOME_ICON),
        git_branch=pick(GIT_BRANCH_ICON),
        up_arrow=pick(UP_ARROW_ICON),
    )


__all__ = [
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "Icons",
    "UITheme",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_icons",
    "resolve_theme",
]
