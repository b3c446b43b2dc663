"""
Design inspiration search.

There is no real image search behind this: each source builds entries from
static image URLs plus a link to the gallery's own search page, and scores
are per-entry constants with a little random jitter. When the sources come
up short, curated examples keyed by component type fill the list.
"""
import logging
import random
from dataclasses import dataclass
from typing import Callable
from urllib.parse import quote

logger = logging.getLogger(__name__)

MIN_RESULTS = 6
MAX_RESULTS = 12
SCORE_JITTER = 0.1

_UNSPLASH = "https://images.unsplash.com/photo-{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&q=80"


@dataclass
class InspirationCandidate:
    title: str
    image_url: str
    source: str
    tags: list[str]
    similarity_score: float
    description: str | None = None
    source_url: str | None = None


InspirationSource = Callable[[str, list[str], random.Random], list[InspirationCandidate]]


def _jitter(base: float, rng: random.Random) -> float:
    score = base + rng.uniform(-SCORE_JITTER, SCORE_JITTER)
    return round(min(1.0, max(0.0, score)), 3)


def _title(component_type: str) -> str:
    return component_type[:1].upper() + component_type[1:]


def _search_slug(component_type: str, keywords: list[str], sep: str) -> str:
    return sep.join(f"{component_type} {' '.join(keywords)}".lower().split())


def dribbble_source(component_type: str, keywords: list[str], rng: random.Random) -> list[InspirationCandidate]:
    search_url = f"https://dribbble.com/search/{_search_slug(component_type, keywords, '-')}"
    return [
        InspirationCandidate(
            title=f"{_title(component_type)} Design from Dribbble",
            image_url=_UNSPLASH.format("1581291518857-4e27b48ff24e"),
            source="Dribbble",
            tags=[component_type, "ui", "modern"],
            similarity_score=_jitter(0.92, rng),
            source_url=search_url,
        ),
        InspirationCandidate(
            title=f"Modern {component_type} Interface",
            image_url=_UNSPLASH.format("1559028006-448665bd7c7f"),
            source="Dribbble",
            tags=[component_type, "interface", "clean"],
            similarity_score=_jitter(0.89, rng),
            source_url=search_url,
        ),
        InspirationCandidate(
            title=f"{component_type} UI Pattern",
            image_url=_UNSPLASH.format("1507003211169-0a1dd7228f2d"),
            source="Dribbble",
            tags=[component_type, "pattern", "design"],
            similarity_score=_jitter(0.87, rng),
            source_url=search_url,
        ),
    ]


def ui_movement_source(component_type: str, keywords: list[str], rng: random.Random) -> list[InspirationCandidate]:
    return [
        InspirationCandidate(
            title=f"{component_type} Pattern from UI Movement",
            image_url=_UNSPLASH.format("1551434678-e076c223a692"),
            source="UI Movement",
            tags=[component_type, "pattern", "inspiration"],
            similarity_score=_jitter(0.85, rng),
            description=f"Modern {component_type} patterns and interactions",
        ),
        InspirationCandidate(
            title=f"{component_type} Animation Examples",
            image_url=_UNSPLASH.format("1586281380349-632531db7ed4"),
            source="UI Movement",
            tags=[component_type, "animation", "motion"],
            similarity_score=_jitter(0.83, rng),
            description=f"Smooth animations for {component_type} elements",
        ),
    ]


_MOBBIN_PATTERNS = {
    "hero": "Hero+Section",
    "form": "Forms",
    "navigation": "Navigation",
    "button": "Buttons",
    "card": "Cards",
    "footer": "Footer",
    "header": "Header",
    "sidebar": "Sidebar",
    "modal": "Modals",
    "tab": "Tabs",
    "dropdown": "Dropdowns",
}


def mobbin_source(component_type: str, keywords: list[str], rng: random.Random) -> list[InspirationCandidate]:
    pattern = _MOBBIN_PATTERNS.get(component_type.lower(), "Hero+Section")
    return [
        InspirationCandidate(
            title=f"{component_type} Patterns from Mobbin",
            image_url=_UNSPLASH.format("1555066931-4365d14bab8c"),
            source="Mobbin",
            tags=[component_type, "patterns", "web"],
            similarity_score=_jitter(0.90, rng),
            description=f"Real web app {component_type} patterns from Mobbin",
            source_url=f"https://mobbin.com/search/apps/web?content_type=marketing-pages&filter={pattern}",
        ),
        InspirationCandidate(
            title=f"Mobile {component_type} Examples",
            image_url=_UNSPLASH.format("1556742049-0cfed4f6a45d"),
            source="Mobbin",
            tags=[component_type, "mobile", "apps"],
            similarity_score=_jitter(0.87, rng),
            description=f"Mobile app {component_type} implementations",
            source_url=f"https://mobbin.com/search/apps/mobile?filter={pattern}",
        ),
    ]


def saas_landing_page_source(component_type: str, keywords: list[str], rng: random.Random) -> list[InspirationCandidate]:
    return [
        InspirationCandidate(
            title=f"SaaS {component_type} Examples",
            image_url=_UNSPLASH.format("1460925895917-afdab827c52f"),
            source="SaaS Landing Page",
            tags=[component_type, "saas", "landing"],
            similarity_score=_jitter(0.92, rng),
            description=f"High-converting SaaS {component_type} designs",
            source_url="https://saaslandingpage.com/",
        ),
        InspirationCandidate(
            title=f"{component_type} Conversion Examples",
            image_url=_UNSPLASH.format("1551434678-e076c223a692"),
            source="SaaS Landing Page",
            tags=[component_type, "conversion", "optimization"],
            similarity_score=_jitter(0.89, rng),
            description=f"Conversion-optimized {component_type} patterns",
            source_url="https://saaslandingpage.com/",
        ),
    ]


def behance_source(component_type: str, keywords: list[str], rng: random.Random) -> list[InspirationCandidate]:
    query = quote(_search_slug(component_type, keywords, " "))
    search_url = f"https://www.behance.net/search/projects?search={query}"
    return [
        InspirationCandidate(
            title=f"{component_type} Design Showcase",
            image_url=_UNSPLASH.format("1460925895917-afdab827c52f"),
            source="Behance",
            tags=[component_type, "showcase", "creative"],
            similarity_score=_jitter(0.84, rng),
            description=f"Creative {component_type} design showcases",
            source_url=search_url,
        ),
        InspirationCandidate(
            title=f"{component_type} Portfolio Projects",
            image_url=_UNSPLASH.format("1467232004584-a241de8bcf5d"),
            source="Behance",
            tags=[component_type, "portfolio", "creative"],
            similarity_score=_jitter(0.82, rng),
            description=f"Professional {component_type} portfolio pieces",
            source_url=search_url,
        ),
    ]


def pinterest_source(component_type: str, keywords: list[str], rng: random.Random) -> list[InspirationCandidate]:
    return [
        InspirationCandidate(
            title=f"{component_type} UI Design Ideas",
            image_url=_UNSPLASH.format("1517077304055-6e89abbf09b0"),
            source="Pinterest",
            tags=[component_type, "ideas", "ui"],
            similarity_score=_jitter(0.81, rng),
            description=f"Pinterest-curated {component_type} design ideas",
        ),
        InspirationCandidate(
            title=f"{component_type} Design Inspiration Board",
            image_url=_UNSPLASH.format("1551650975-87deedd944c3"),
            source="Pinterest",
            tags=[component_type, "inspiration", "board"],
            similarity_score=_jitter(0.79, rng),
            description=f"Curated {component_type} inspiration boards",
        ),
    ]


DEFAULT_SOURCES: list[InspirationSource] = [
    dribbble_source,
    ui_movement_source,
    mobbin_source,
    saas_landing_page_source,
    behance_source,
    pinterest_source,
]


# (title, photo id, source, tags, score, description)
_CURATED = {
    "hero": [
        ("Modern Hero Section", "1467232004584-a241de8bcf5d", "Landing Page Gallery",
         ["hero", "landing", "modern"], 0.94, "Clean hero section with strong call-to-action"),
        ("SaaS Hero Design", "1460925895917-afdab827c52f", "SaaS Examples",
         ["hero", "saas", "conversion"], 0.91, "High-converting SaaS hero section"),
    ],
    "form": [
        ("Modern Contact Form", "1551434678-e076c223a692", "Form Patterns",
         ["form", "contact", "modern"], 0.90, "Clean contact form with floating labels"),
        ("Registration Form Design", "1586281380349-632531db7ed4", "UI Patterns",
         ["form", "registration", "ui"], 0.85, "Multi-step registration form"),
        ("Login Form Inspiration", "1555066931-4365d14bab8c", "Best Practices",
         ["form", "login", "simple"], 0.88, "Minimalist login form design"),
    ],
    "button": [
        ("Call-to-Action Buttons", "1559028006-448665bd7c7f", "Button Library",
         ["button", "cta", "primary"], 0.92, "High-converting button designs"),
        ("Interactive Button States", "1517077304055-6e89abbf09b0", "Interaction Design",
         ["button", "states", "hover"], 0.87, "Button hover and active states"),
    ],
    "navigation": [
        ("Modern Navigation Menu", "1467232004584-a241de8bcf5d", "Navigation Patterns",
         ["navigation", "menu", "header"], 0.91, "Clean horizontal navigation"),
        ("Sticky Header Navigation", "1551434678-e076c223a692", "Navigation Patterns",
         ["navigation", "sticky", "header"], 0.86, "Navigation bar that stays in view while scrolling"),
    ],
    "card": [
        ("Product Card Design", "1556742049-0cfed4f6a45d", "Card Components",
         ["card", "product", "ecommerce"], 0.89, "E-commerce product cards"),
        ("Feature Cards Layout", "1460925895917-afdab827c52f", "Layout Patterns",
         ["card", "features", "grid"], 0.86, "Feature showcase cards"),
    ],
}

_GENERAL = [
    ("UI Design Inspiration", "1581291518857-4e27b48ff24e", "UI Inspiration",
     ["ui", "design"], 0.75, "Modern UI design patterns"),
    ("Interface Design Example", "1507003211169-0a1dd7228f2d", "Interface Gallery",
     ["interface", "clean"], 0.78, "Clean interface design"),
    ("Design System Components", "1551650975-87deedd944c3", "Design Systems",
     ["system", "components"], 0.80, "Design system showcase"),
    ("Component Library Showcase", "1559028006-448665bd7c7f", "Design Systems",
     ["library", "components"], 0.77, "Reusable component library examples"),
]


def curated_examples(component_type: str) -> list[InspirationCandidate]:
    """Hand-picked examples for a component type, padded with general UI examples."""
    examples = [
        InspirationCandidate(title, _UNSPLASH.format(photo), source, list(tags), score, description)
        for title, photo, source, tags, score, description in _CURATED.get(component_type, _CURATED["card"])
    ]
    examples.extend(
        InspirationCandidate(title, _UNSPLASH.format(photo), source, [component_type, *tags], score, description)
        for title, photo, source, tags, score, description in _GENERAL
    )
    return examples[:8]


def search_design_inspirations(
    component_type: str,
    keywords: list[str],
    sources: list[InspirationSource] | None = None,
    rng: random.Random | None = None,
) -> list[InspirationCandidate]:
    rng = rng or random.Random()
    sources = DEFAULT_SOURCES if sources is None else sources

    results: list[InspirationCandidate] = []
    for source in sources:
        try:
            results.extend(source(component_type, keywords, rng))
        except Exception:
            logger.exception("Inspiration source %s failed", getattr(source, "__name__", source))

    if len(results) < MIN_RESULTS:
        logger.info(
            "Only %d inspirations for %s, adding curated examples", len(results), component_type
        )
        results.extend(curated_examples(component_type))

    results.sort(key=lambda c: c.similarity_score, reverse=True)
    return results[:MAX_RESULTS]
