from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Final

from hotelsite.theme import DEFAULT_THEME, ThemeId, resolve_theme


class ThemeStyles(Mapping[str, str]):
    """Read-only component -> CSS class mapping for one theme.

    Looking up a component the theme does not style yields ``""`` so
    templates can interpolate any component name without guarding.
    """

    __slots__ = ("_theme", "_classes")

    def __init__(self, theme: ThemeId, classes: Mapping[str, str]) -> None:
        self._theme = theme
        self._classes = dict(classes)

    @property
    def theme(self) -> ThemeId:
        return self._theme

    def __getitem__(self, component: str) -> str:
        return self._classes.get(component, "")

    def __contains__(self, component: object) -> bool:
        return component in self._classes

    def __iter__(self) -> Iterator[str]:
        return iter(self._classes)

    def __len__(self) -> int:
        return len(self._classes)

    def __repr__(self) -> str:
        return f"ThemeStyles({self._theme.value!r}, {self._classes!r})"


_STYLE_TABLE: Final[dict[ThemeId, dict[str, str]]] = {
    ThemeId.CLASSIC: {
        "page": "bg-stone-50 text-slate-900 font-serif",
        "header": "bg-blue-900 text-white shadow",
        "hero": "bg-gradient-to-b from-blue-900 to-blue-700 text-white",
        "heading": "font-serif text-blue-900",
        "card": "bg-white border border-stone-200 rounded-md shadow-sm",
        "button": "bg-blue-800 hover:bg-blue-900 text-white rounded-md",
        "button_secondary": "border border-blue-800 text-blue-800 rounded-md",
        "search_box": "bg-white border border-stone-300 rounded-lg shadow",
        "input": "border border-stone-300 rounded-md",
        "badge": "bg-blue-100 text-blue-900",
        "footer": "bg-slate-900 text-stone-200",
    },
    ThemeId.MODERN: {
        "page": "bg-slate-950 text-slate-100 font-sans",
        "header": "bg-slate-900/90 backdrop-blur text-white",
        "hero": "bg-slate-900 text-white",
        "heading": "font-sans font-light tracking-tight text-white",
        "card": "bg-slate-900 border border-slate-800 rounded-xl",
        "button": "bg-white text-slate-900 hover:bg-slate-200 rounded-full",
        "button_secondary": "border border-slate-600 text-slate-100 rounded-full",
        "search_box": "bg-slate-900 border border-slate-700 rounded-2xl",
        "input": "bg-slate-800 border border-slate-700 rounded-lg text-slate-100",
        "badge": "bg-slate-800 text-slate-200",
        "footer": "bg-black text-slate-400",
    },
    ThemeId.LUXURY: {
        "page": "bg-neutral-50 text-neutral-900 font-serif",
        "header": "bg-neutral-950 text-amber-200",
        "hero": "bg-neutral-950 text-amber-100",
        "heading": "font-serif uppercase tracking-widest text-amber-800",
        "card": "bg-white border border-amber-200 shadow-lg",
        "button": "bg-amber-700 hover:bg-amber-800 text-white uppercase tracking-wider",
        "button_secondary": "border border-amber-700 text-amber-800 uppercase",
        "search_box": "bg-white border border-amber-300 shadow-xl",
        "input": "border border-amber-200",
        "badge": "bg-amber-100 text-amber-900",
        "footer": "bg-neutral-950 text-amber-100",
    },
    ThemeId.COASTAL: {
        "page": "bg-sky-50 text-slate-800 font-sans",
        "header": "bg-white/80 text-cyan-800 shadow-sm",
        "hero": "bg-gradient-to-b from-cyan-500 to-sky-300 text-white",
        "heading": "font-sans text-cyan-800",
        "card": "bg-white rounded-2xl shadow-md",
        "button": "bg-cyan-600 hover:bg-cyan-700 text-white rounded-full",
        "button_secondary": "border border-cyan-600 text-cyan-700 rounded-full",
        "search_box": "bg-white/90 rounded-3xl shadow-lg",
        "input": "border border-sky-200 rounded-full",
        "badge": "bg-cyan-100 text-cyan-800",
        "footer": "bg-cyan-900 text-sky-100",
    },
    ThemeId.BOUTIQUE: {
        "page": "bg-rose-50 text-stone-800 font-serif",
        "header": "bg-purple-900 text-rose-50",
        "hero": "bg-gradient-to-r from-purple-800 to-rose-600 text-white",
        "heading": "font-serif italic text-purple-900",
        "card": "bg-white border-2 border-purple-100 rounded-3xl",
        "button": "bg-purple-700 hover:bg-purple-800 text-white rounded-none",
        "button_secondary": "border-2 border-purple-700 text-purple-800",
        "search_box": "bg-white border-2 border-purple-200 rounded-3xl",
        "input": "border-b-2 border-purple-300",
        "badge": "bg-rose-100 text-purple-900",
        "footer": "bg-purple-950 text-rose-100",
    },
}
_RESOLVED: Final[dict[ThemeId, ThemeStyles]] = {
    theme: ThemeStyles(theme, classes) for theme, classes in _STYLE_TABLE.items()
}


def resolve_styles(theme: object) -> ThemeStyles:
    resolved = resolve_theme(theme)
    return _RESOLVED.get(resolved, _RESOLVED[DEFAULT_THEME])


def theme_class(theme: object, component: str) -> str:
    return resolve_styles(theme)[component]
