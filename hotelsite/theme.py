from dataclasses import dataclass
from enum import Enum
from typing import Final


class ThemeId(str, Enum):
    CLASSIC = "classic"
    MODERN = "modern"
    LUXURY = "luxury"
    COASTAL = "coastal"
    BOUTIQUE = "boutique"


@dataclass(frozen=True)
class ThemeDefinition:
    slug: ThemeId
    label: str
    description: str
    icon: str
    thumbnail: str
    accent_color: str
    color_scheme: str = "light"

    @property
    def body_class(self) -> str:
        return f"theme-{self.slug.value}"

    @property
    def is_dark(self) -> bool:
        return self.color_scheme == "dark"


THEMES: Final[tuple[ThemeDefinition, ...]] = (
    ThemeDefinition(
        slug=ThemeId.CLASSIC,
        label="Classic",
        description="Traditional, timeless design",
        icon="clock",
        thumbnail="/static/themes/classic-theme.png",
        accent_color="#1e40af",
    ),
    ThemeDefinition(
        slug=ThemeId.MODERN,
        label="Modern",
        description="Clean and minimal contemporary style",
        icon="square",
        thumbnail="/static/themes/modern-theme.png",
        accent_color="#0f172a",
        color_scheme="dark",
    ),
    ThemeDefinition(
        slug=ThemeId.LUXURY,
        label="Luxury",
        description="Elegant premium presentation",
        icon="gem",
        thumbnail="/static/themes/luxury-theme.png",
        accent_color="#854d0e",
    ),
    ThemeDefinition(
        slug=ThemeId.COASTAL,
        label="Coastal",
        description="Airy, calm seaside look",
        icon="waves",
        thumbnail="/static/themes/coastal-theme.png",
        accent_color="#0891b2",
    ),
    ThemeDefinition(
        slug=ThemeId.BOUTIQUE,
        label="Boutique",
        description="Distinctive, artistic design",
        icon="palette",
        thumbnail="/static/themes/boutique-theme.png",
        accent_color="#7e22ce",
    ),
)
_THEME_SLUGS: Final[frozenset[str]] = frozenset(theme.slug.value for theme in THEMES)
_DEFINITIONS: Final[dict[ThemeId, ThemeDefinition]] = {theme.slug: theme for theme in THEMES}
DEFAULT_THEME: Final[ThemeId] = ThemeId.CLASSIC


def is_valid_theme(candidate: object) -> bool:
    if isinstance(candidate, ThemeId):
        return True
    return isinstance(candidate, str) and candidate in _THEME_SLUGS


def resolve_theme(candidate: object) -> ThemeId:
    """Map any value onto a registered theme, falling back to ``DEFAULT_THEME``."""
    if is_valid_theme(candidate):
        return ThemeId(candidate)
    return DEFAULT_THEME


def get_theme_definition(theme: object) -> ThemeDefinition:
    return _DEFINITIONS[resolve_theme(theme)]
